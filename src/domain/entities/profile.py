from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PROFILE_FIELDS = ("email", "first_name", "last_name", "phone", "correspondence_address")


@dataclass(frozen=True)
class ProfileEntity:
    id: str  # auth.users id, 1:1 with the identity
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    correspondence_address: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
