from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json
from ..container import Container
from ..core.exceptions import NotFoundError

_MEMBER_FIELDS = {
    "name",
    "email",
    "role",
    "department",
    "is_minor",
    "guardian_name",
    "guardian_email",
    "guardian_phone",
    "profile_picture",
}


def register(app: Flask, container: Container) -> None:
    members = container.member_service

    @app.route("/api/members", methods=["GET"], endpoint="list_members")
    def list_members():
        return jsonify([to_json(m) for m in container.store.members])

    @app.route("/api/members/<member_id>", methods=["GET"], endpoint="get_member")
    def get_member(member_id: str):
        member = container.store.get_member(member_id)
        if not member:
            raise NotFoundError("Member not found")
        return jsonify(to_json(member))

    @app.route("/api/members", methods=["POST"], endpoint="create_member")
    def create_member():
        data = request.get_json(silent=True) or {}
        fields = {k: v for k, v in data.items() if k in _MEMBER_FIELDS}
        member = members.create_member(
            name=fields.pop("name", None),
            email=fields.pop("email", None),
            **fields,
        )
        return jsonify(to_json(member)), 201

    @app.route("/api/members/<member_id>", methods=["PATCH"], endpoint="update_member")
    def update_member(member_id: str):
        data = request.get_json(silent=True) or {}
        fields = {k: v for k, v in data.items() if k in _MEMBER_FIELDS}
        return jsonify(to_json(members.update_member(member_id, **fields)))

    @app.route("/api/members/<member_id>", methods=["DELETE"], endpoint="delete_member")
    def delete_member(member_id: str):
        members.remove_member(member_id)
        return jsonify({"success": True})
