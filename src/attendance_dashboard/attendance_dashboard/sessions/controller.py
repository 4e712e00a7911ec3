from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json
from ..common.validators import require_choice
from ..container import Container
from ..core.enums import SessionStatus
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    store = container.store
    queries = container.queries

    def _transition(session_id: str, status: SessionStatus):
        if store.get_session(session_id) is None:
            raise NotFoundError("Session not found")
        if not store.transition_session(session_id, status):
            return jsonify({"success": False, "message": "Transition not allowed"}), 409
        return jsonify(to_json(store.get_session(session_id)))

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    def list_sessions():
        status = request.args.get("status")
        creator_id = request.args.get("creator_id")
        if status:
            sessions = queries.sessions_by_status(require_choice(SessionStatus, status, "status"))
        else:
            sessions = list(store.sessions)
        if creator_id:
            sessions = [s for s in sessions if s.creator.id == creator_id]
        return jsonify([to_json(s) for s in sessions])

    @app.route("/api/sessions/<session_id>/close", methods=["POST"], endpoint="close_session")
    def close_session(session_id: str):
        return _transition(session_id, SessionStatus.CLOSED)

    @app.route("/api/sessions/<session_id>/status", methods=["POST"], endpoint="transition_session")
    def transition_session(session_id: str):
        data = request.get_json(silent=True) or {}
        return _transition(session_id, require_choice(SessionStatus, data.get("status"), "status"))

    @app.route("/api/sessions/<session_id>", methods=["DELETE"], endpoint="delete_session")
    def delete_session(session_id: str):
        store.remove_session(session_id)
        return jsonify({"success": True})
