from __future__ import annotations

import os
from datetime import datetime

from supabase import Client

from src.domain.entities.profile import PROFILE_FIELDS, ProfileEntity
from src.domain.errors import ProfileLookupError
from src.infrastructure.database.postgres_client import get_postgres_client

_SELECT_COLUMNS = ", ".join(PROFILE_FIELDS)


class ProfileRepository:
    """Read access to ``public.profiles``.

    Rows are created by the ``on_auth_user_created`` trigger, so there is no
    insert here. With a session-scoped client the row-level policy limits
    reads to the caller's own row.

    In local DB mode (``USE_LOCAL_DB=1``) the query runs over a plain
    psycopg2 connection as the configured ``POSTGRES_USER``, usually a
    superuser. Row-level policies do not apply there; only the
    ``WHERE id = %s`` filter restricts the result.
    """

    def __init__(self, client: Client | None) -> None:
        self.client = client
        self.use_local_db = os.getenv("USE_LOCAL_DB", "0") == "1"
        self.pg_client = get_postgres_client() if self.use_local_db else None

    def _row_to_entity(self, user_id: str, row: dict) -> ProfileEntity:
        created_at = row.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        updated_at = row.get("updated_at")
        if isinstance(updated_at, str):
            updated_at = datetime.fromisoformat(updated_at)

        return ProfileEntity(
            id=row.get("id", user_id),
            email=row.get("email"),
            first_name=row.get("first_name"),
            last_name=row.get("last_name"),
            phone=row.get("phone"),
            correspondence_address=row.get("correspondence_address"),
            created_at=created_at,
            updated_at=updated_at,
        )

    def get_own(self, user_id: str) -> ProfileEntity | None:
        # PostgreSQL mode
        if self.use_local_db and self.pg_client:
            try:
                query = f"SELECT id, {_SELECT_COLUMNS} FROM profiles WHERE id = %s"
                row = self.pg_client.execute_one(query, (user_id,))
            except Exception as exc:
                raise ProfileLookupError(f"PostgreSQL profile lookup failed: {exc}") from exc
            return self._row_to_entity(user_id, row) if row else None

        if self.client is None:
            raise ProfileLookupError("No database client configured")

        # Supabase mode
        try:
            res = (
                self.client.table("profiles")
                .select(_SELECT_COLUMNS)
                .eq("id", user_id)
                .maybe_single()
                .execute()
            )
        except Exception as exc:
            raise ProfileLookupError(f"DB profile lookup failed: {exc}") from exc
        # maybe_single() yields None (or empty data) when no row matches
        if res is None or not res.data:
            return None
        return self._row_to_entity(user_id, res.data)
