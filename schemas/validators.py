"""Shared field types and validators for request schemas"""
from typing import Annotated

from pydantic import StringConstraints

# Required text fields: surrounding whitespace is dropped and "" is rejected
NonBlankStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Room numbers are join keys, so they are compared exactly after trimming
RoomNumber = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=32)
]


def normalize_email(v: str) -> str:
    """Emails are matched case-insensitively and stored lower-cased"""
    return v.strip().lower()
