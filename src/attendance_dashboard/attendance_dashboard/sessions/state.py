from __future__ import annotations

from ..core.enums import SessionStatus

# Closed is terminal.
TRANSITIONS: dict[SessionStatus, frozenset[SessionStatus]] = {
    SessionStatus.SCHEDULED: frozenset({SessionStatus.ACTIVE, SessionStatus.CLOSED}),
    SessionStatus.ACTIVE: frozenset({SessionStatus.COMPLETED, SessionStatus.CLOSED}),
    SessionStatus.COMPLETED: frozenset({SessionStatus.CLOSED}),
    SessionStatus.CLOSED: frozenset(),
}


def can_transition(current: SessionStatus, target: SessionStatus) -> bool:
    return target in TRANSITIONS.get(current, frozenset())
