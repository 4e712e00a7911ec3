from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.serialization import to_json
from ..container import Container
from .export import XLSX_MIMETYPE


def register(app: Flask, container: Container) -> None:
    dashboard = container.dashboard_service

    def _days():
        return request.args.get("days", type=int)

    @app.route("/api/reports/weekly", methods=["GET"], endpoint="weekly_chart")
    def weekly_chart():
        return jsonify([p.to_dict() for p in dashboard.weekday_chart(days=_days())])

    @app.route("/api/reports/summary", methods=["GET"], endpoint="attendance_summary")
    def attendance_summary():
        return jsonify(dashboard.summary(days=_days()).to_dict())

    @app.route("/api/reports/courses", methods=["GET"], endpoint="course_rates")
    def course_rates():
        return jsonify(dashboard.course_rates(days=_days()))

    @app.route("/api/reports/early-arrivals", methods=["GET"], endpoint="early_arrivals")
    def early_arrivals():
        limit = request.args.get("limit", type=int)
        return jsonify([to_json(r) for r in dashboard.early_arrivals(limit=limit)])

    @app.route("/api/reports/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard_view():
        data = dashboard.build()
        return jsonify(
            {
                "chart": [p.to_dict() for p in data.chart],
                "summary": data.summary.to_dict(),
                "course_rates": data.course_rates,
                "early_arrivals": [to_json(r) for r in data.early_arrivals],
            }
        )

    @app.route("/api/reports/members.xlsx", methods=["GET"], endpoint="export_members")
    def export_members():
        output = dashboard.export_members()
        return send_file(output, download_name="Members.xlsx", as_attachment=True, mimetype=XLSX_MIMETYPE)
