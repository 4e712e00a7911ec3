from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..common.ids import new_id
from ..common.validators import optional_text, require_choice, require_email, require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from ..store.entity_store import EntityStore
from .model import Member, UserRef

_GUARDIAN_FIELDS = ("guardian_name", "guardian_email", "guardian_phone")
_USER_FIELDS = ("name", "email", "role", "profile_picture")


def _check_guardian(is_minor: bool, guardian: dict[str, Optional[str]]) -> dict[str, Optional[str]]:
    cleaned = {k: optional_text(v, k.replace("_", " ").capitalize()) for k, v in guardian.items()}
    if not is_minor:
        if any(cleaned.values()):
            raise ValidationError("Guardian details are only allowed for minors")
        return cleaned

    cleaned["guardian_name"] = require_non_empty(cleaned.get("guardian_name"), "Guardian name")
    if cleaned.get("guardian_email"):
        cleaned["guardian_email"] = require_email(cleaned["guardian_email"], "Guardian email")
    return cleaned


class MemberService:
    """Use case: create and edit members, enforcing the guardian rule before commit."""

    def __init__(self, store: EntityStore):
        self._store = store

    def create_member(
        self,
        *,
        name: str,
        email: str,
        role: Role | str = Role.STUDENT,
        department: Optional[str] = None,
        is_minor: bool = False,
        guardian_name: Optional[str] = None,
        guardian_email: Optional[str] = None,
        guardian_phone: Optional[str] = None,
        user_id: Optional[str] = None,
        profile_picture: Optional[str] = None,
    ) -> Member:
        user = UserRef(
            id=user_id or new_id(),
            name=require_non_empty(name, "Name"),
            email=require_email(email),
            role=require_choice(Role, role, "role").value,
            profile_picture=optional_text(profile_picture, "Profile picture"),
        )
        guardian = _check_guardian(
            bool(is_minor),
            {"guardian_name": guardian_name, "guardian_email": guardian_email, "guardian_phone": guardian_phone},
        )
        return self._store.add_member(
            user=user,
            department=optional_text(department, "Department"),
            is_minor=bool(is_minor),
            **guardian,
        )

    def update_member(self, member_id: str, **fields: Any) -> Member:
        current = self._store.get_member(member_id)
        if current is None:
            raise NotFoundError("Member not found")

        user_changes = {k: fields.pop(k) for k in _USER_FIELDS if k in fields}
        if "name" in user_changes:
            user_changes["name"] = require_non_empty(user_changes["name"], "Name")
        if "email" in user_changes:
            user_changes["email"] = require_email(user_changes["email"])
        if "role" in user_changes:
            user_changes["role"] = require_choice(Role, user_changes["role"], "role").value

        if "department" in fields:
            fields["department"] = optional_text(fields["department"], "Department")

        is_minor = bool(fields.get("is_minor", current.is_minor))
        if not is_minor and "is_minor" in fields:
            # Turning the flag off clears guardian details unless new ones are supplied.
            guardian = {k: fields.get(k) for k in _GUARDIAN_FIELDS}
        else:
            guardian = {k: fields.get(k, getattr(current, k)) for k in _GUARDIAN_FIELDS}
        fields.update(_check_guardian(is_minor, guardian))
        fields["is_minor"] = is_minor

        if user_changes:
            fields["user"] = replace(current.user, **user_changes)

        self._store.update_member(member_id, **fields)
        return self._store.get_member(member_id)

    def remove_member(self, member_id: str) -> None:
        self._store.remove_member(member_id)
