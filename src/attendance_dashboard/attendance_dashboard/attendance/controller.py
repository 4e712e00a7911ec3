from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json
from ..common.validators import require_choice
from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    store = container.store
    queries = container.queries

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        member_id = request.args.get("member_id")
        session_id = request.args.get("session_id")
        if member_id:
            records = queries.attendance_for_member(member_id)
        elif session_id:
            records = queries.attendance_for_session(session_id)
        else:
            records = list(store.attendance)
        return jsonify([to_json(r) for r in records])

    @app.route("/api/attendance/<record_id>/status", methods=["PATCH"], endpoint="update_attendance_status")
    def update_attendance_status(record_id: str):
        if store.get_attendance(record_id) is None:
            raise NotFoundError("Attendance record not found")

        data = request.get_json(silent=True) or {}
        status = require_choice(AttendanceStatus, data.get("status"), "status")
        store.update_attendance_status(record_id, status)
        return jsonify(to_json(store.get_attendance(record_id)))

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="delete_attendance")
    def delete_attendance(record_id: str):
        store.remove_attendance_record(record_id)
        return jsonify({"success": True})
