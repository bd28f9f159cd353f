from flask import Blueprint, jsonify, request

from restobooks.services import reporting_service


reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")


@reports_bp.get("/profit-and-loss")
def profit_and_loss_report():
    start = request.args.get("start")
    end = request.args.get("end")

    try:
        report = reporting_service.profit_and_loss_report(start=start, end=end)
        return jsonify(report), 200
    except reporting_service.ReportError as exc:
        return jsonify({"error": str(exc)}), 400


@reports_bp.get("/profit-and-loss/summary")
def profit_and_loss_summary():
    start = request.args.get("start")
    end = request.args.get("end")

    try:
        report = reporting_service.profit_and_loss_summary(start=start, end=end)
        return jsonify(report), 200
    except reporting_service.ReportError as exc:
        return jsonify({"error": str(exc)}), 400
