from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serialization import to_json
from ..common.validators import require_choice, require_email, require_non_empty
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError

# Fields a client may set when creating or editing a user, per role.
_EDITABLE = {
    Role.STUDENT: {"name", "email", "profile_picture", "department", "phone", "student_number", "year_group"},
    Role.LECTURER: {"name", "email", "profile_picture", "department", "phone", "staff_number", "hourly_rate"},
    Role.SYSTEM_ADMIN: {"name", "email", "profile_picture", "department", "phone", "admin_number", "permissions"},
}


def _permissions(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(p, str) for p in value):
        return tuple(value)
    raise ValidationError("permissions must be a list of strings")


def register(app: Flask, container: Container) -> None:
    store = container.store

    def _draft(role: Role, data: dict) -> dict:
        draft = {k: v for k, v in data.items() if k in _EDITABLE[role]}
        if "permissions" in draft:
            draft["permissions"] = _permissions(draft["permissions"])
        return draft

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    def list_users():
        role = request.args.get("role")
        if role:
            users = container.queries.users_by_role(require_choice(Role, role, "role"))
        else:
            users = store.get_all_users()
        return jsonify([to_json(u) for u in users])

    @app.route("/api/users/<user_id>", methods=["GET"], endpoint="get_user")
    def get_user(user_id: str):
        user = store.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return jsonify(to_json(user))

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    def create_user():
        data = request.get_json(silent=True) or {}
        role = require_choice(Role, data.get("role"), "role")
        draft = _draft(role, data)
        draft["name"] = require_non_empty(data.get("name"), "Name")
        draft["email"] = require_email(data.get("email"))

        add = {
            Role.STUDENT: store.add_student,
            Role.LECTURER: store.add_lecturer,
            Role.SYSTEM_ADMIN: store.add_admin,
        }[role]
        return jsonify(to_json(add(**draft))), 201

    @app.route("/api/users/<user_id>", methods=["PATCH"], endpoint="update_user")
    def update_user(user_id: str):
        user = store.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        data = request.get_json(silent=True) or {}
        fields = _draft(user.role, data)
        if "name" in fields:
            fields["name"] = require_non_empty(fields["name"], "Name")
        if "email" in fields:
            fields["email"] = require_email(fields["email"])

        update = {
            Role.STUDENT: store.update_student,
            Role.LECTURER: store.update_lecturer,
            Role.SYSTEM_ADMIN: store.update_admin,
        }[user.role]
        update(user_id, **fields)
        return jsonify(to_json(store.get_user(user_id)))

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    def delete_user(user_id: str):
        user = store.get_user(user_id)
        if user:
            store.delete_user(user_id, user.role)
        return jsonify({"success": True})
