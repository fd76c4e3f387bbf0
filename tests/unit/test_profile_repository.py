from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from src.domain.errors import ProfileLookupError
from src.infrastructure.database.repositories.profile_repository import ProfileRepository


def _client_returning(result) -> Mock:
    client = Mock()
    query = client.table.return_value.select.return_value.eq.return_value.maybe_single.return_value
    query.execute.return_value = result
    return client


def test_get_own_selects_profile_fields_for_identity():
    row = {
        "email": "ada@example.com",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "phone": "1234567890",
        "correspondence_address": "12 St James's Square",
    }
    client = _client_returning(SimpleNamespace(data=row))

    profile = ProfileRepository(client).get_own("user-1")

    client.table.assert_called_once_with("profiles")
    client.table.return_value.select.assert_called_once_with(
        "email, first_name, last_name, phone, correspondence_address"
    )
    client.table.return_value.select.return_value.eq.assert_called_once_with("id", "user-1")
    assert profile.id == "user-1"
    assert profile.last_name == "Lovelace"
    assert profile.correspondence_address == "12 St James's Square"


@pytest.mark.parametrize("result", [None, SimpleNamespace(data=None)])
def test_get_own_returns_none_without_row(result):
    client = _client_returning(result)

    assert ProfileRepository(client).get_own("user-1") is None


def test_get_own_wraps_client_errors():
    client = Mock()
    client.table.side_effect = RuntimeError("JWT expired")

    with pytest.raises(ProfileLookupError) as exc_info:
        ProfileRepository(client).get_own("user-1")

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_get_own_without_client_fails():
    with pytest.raises(ProfileLookupError):
        ProfileRepository(None).get_own("user-1")


def test_local_db_mode_reads_through_postgres(monkeypatch):
    pg = Mock()
    pg.execute_one.return_value = {
        "id": "user-1",
        "email": None,
        "first_name": "Grace",
        "last_name": None,
        "phone": "1234567890",
        "correspondence_address": None,
    }
    monkeypatch.setenv("USE_LOCAL_DB", "1")
    monkeypatch.setattr(
        "src.infrastructure.database.repositories.profile_repository.get_postgres_client",
        lambda: pg,
    )

    profile = ProfileRepository(None).get_own("user-1")

    query, params = pg.execute_one.call_args.args
    assert "FROM profiles WHERE id = %s" in query
    assert params == ("user-1",)
    assert profile.first_name == "Grace"
