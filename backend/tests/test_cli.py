# Overview: Pytest coverage for the Flask CLI command groups.

from restobooks.cli import _money


class TestMoney:

    def test_formats_cents(self):
        assert _money(0) == '0.00'
        assert _money(123456) == '1,234.56'
        assert _money(-2500) == '-25.00'


class TestCommands:

    def test_seed_demo_then_inspect(self, app, db_session):
        runner = app.test_cli_runner()

        result = runner.invoke(args=['system', 'seed-demo'])
        assert result.exit_code == 0, result.output
        assert 'Demo data loaded' in result.output

        result = runner.invoke(args=['petty-cash', 'balance'])
        assert result.exit_code == 0
        assert 'Balance: 410.00 (3 transactions)' in result.output

        result = runner.invoke(args=['inventory', 'status'])
        assert result.exit_code == 0
        assert 'Basmati Rice' in result.output
        assert 'LOW' in result.output

        result = runner.invoke(args=['reports', 'pnl'])
        assert result.exit_code == 0
        assert 'Total sales:       4,337.50' in result.output
        assert 'Total expenses:    3,406.50' in result.output
        assert 'Rent' in result.output

    def test_inventory_status_empty(self, app, db_session):
        result = app.test_cli_runner().invoke(args=['inventory', 'status'])
        assert result.exit_code == 0
        assert 'No inventory items.' in result.output

    def test_pnl_malformed_date(self, app, db_session):
        result = app.test_cli_runner().invoke(args=['reports', 'pnl', '--start', '2024-02-30'])
        assert result.exit_code != 0
        assert 'malformed calendar date' in result.output

    def test_pnl_period_in_day_month_year(self, app, db_session):
        result = app.test_cli_runner().invoke(args=['reports', 'pnl', '--start', '2024-01-01', '--end', '20240131'])
        assert result.exit_code == 0, result.output
        assert 'Period:            01/01/2024 .. 31/01/2024' in result.output

    def test_inventory_status_low_only(self, app, db_session):
        runner = app.test_cli_runner()
        assert runner.invoke(args=['system', 'seed-demo']).exit_code == 0

        result = runner.invoke(args=['inventory', 'status', '--low'])
        assert result.exit_code == 0
        assert 'Basmati Rice' in result.output
        assert 'Groundnut Oil' in result.output
        assert 'Paper Napkins' not in result.output
