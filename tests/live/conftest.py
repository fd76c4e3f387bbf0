"""Fixtures for tests that talk to a running Supabase project.

Skipped unless SUPABASE_URL and SUPABASE_ANON_KEY are set. Test phone
numbers and codes come from ``[auth.sms.test_otp]`` in supabase/config.toml.
"""
from __future__ import annotations

import os
import tomllib
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import pytest

from src.infrastructure.database.supabase_client import SupabaseAdminAdapter

CONFIG_TOML = Path(__file__).resolve().parents[2] / "supabase" / "config.toml"


@dataclass(frozen=True)
class PhoneEntry:
    phone: str
    otp: str


def pytest_collection_modifyitems(config, items):
    if os.getenv("SUPABASE_URL") and os.getenv("SUPABASE_ANON_KEY"):
        return
    skip = pytest.mark.skip(reason="SUPABASE_URL and SUPABASE_ANON_KEY are required for live tests")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip)


def load_test_otps(path: Path) -> dict[str, str]:
    with path.open("rb") as fh:
        config = tomllib.load(fh)
    test_otp = config.get("auth", {}).get("sms", {}).get("test_otp") or {}
    if not test_otp:
        raise RuntimeError(f"No [auth.sms.test_otp] entries found in {path}")
    return {
        (key if key.startswith("+") else f"+{key}"): str(value) for key, value in test_otp.items()
    }


@pytest.fixture(scope="session")
def test_phones() -> list[PhoneEntry]:
    path = Path(os.getenv("SUPABASE_CONFIG_TOML", CONFIG_TOML))
    otps = load_test_otps(path)
    return [PhoneEntry(phone, otp) for phone, otp in sorted(otps.items())]


@pytest.fixture(scope="session")
def live_client():
    from fastapi.testclient import TestClient

    from src.main import create_app

    return TestClient(create_app())


@pytest.fixture()
def user_cleanup():
    """Delete identities for the given phones before and after the test body."""
    admin = SupabaseAdminAdapter.from_env()

    @contextmanager
    def cleanup(*phones: str):
        if admin is not None:
            for phone in phones:
                admin.delete_user_by_phone(phone)
        try:
            yield
        finally:
            if admin is not None:
                for phone in phones:
                    admin.delete_user_by_phone(phone)

    return cleanup
