from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, kw_only=True)
class Course:
    id: str
    code: str
    name: str
    department: str
    lecturer_id: str
    lecturer_name: str
    created_at: datetime
    enrolled_students: tuple[str, ...] = ()
    total_sessions: int = 0
    description: Optional[str] = None
