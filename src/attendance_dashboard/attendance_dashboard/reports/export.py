from __future__ import annotations

import io
from typing import Iterable

import pandas as pd

from ..core.constants import DEFAULT_DEPARTMENT
from ..members.model import Member
from .statistics import member_attendance_rate

MEMBER_COLUMNS = ["Name", "Email", "Role", "Department", "ID", "Phone", "Attendance Rate"]
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def members_frame(members: Iterable[Member]) -> pd.DataFrame:
    rows = []
    for member in members:
        rows.append(
            {
                "Name": member.user.name,
                "Email": member.user.email,
                "Role": member.user.role,
                "Department": member.department or DEFAULT_DEPARTMENT,
                "ID": member.id,
                "Phone": member.guardian_phone or "N/A",
                "Attendance Rate": f"{member_attendance_rate(member):.2f}%",
            }
        )
    return pd.DataFrame(rows, columns=MEMBER_COLUMNS)


def members_to_excel(members: Iterable[Member]) -> io.BytesIO:
    """Members list as an in-memory .xlsx workbook, rewound for reading."""
    df = members_frame(members)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Members")

    output.seek(0)
    return output
