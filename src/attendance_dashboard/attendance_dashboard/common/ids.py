from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.ascii_lowercase + string.digits


def new_id() -> str:
    """Process-unique identifier: millisecond timestamp plus a random suffix."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"{millis}-{suffix}"
