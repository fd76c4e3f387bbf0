import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so 'src' is importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("USE_LOCAL_DB", "0")


@pytest.fixture()
def auth_adapter() -> Mock:
    from src.infrastructure.database.supabase_client import SupabaseAuthAdapter

    return Mock(spec=SupabaseAuthAdapter)


@pytest.fixture()
def profile_repo() -> Mock:
    from src.infrastructure.database.repositories.profile_repository import ProfileRepository

    repo = Mock(spec=ProfileRepository)
    repo.get_own.return_value = None
    return repo


@pytest.fixture()
def client(auth_adapter, profile_repo) -> TestClient:
    # lazy import after env configured
    from src.infrastructure.api.dependencies import get_auth_adapter, get_profile_repo_factory
    from src.main import create_app

    app = create_app()
    app.dependency_overrides[get_auth_adapter] = lambda: auth_adapter
    app.dependency_overrides[get_profile_repo_factory] = lambda: (lambda token: profile_repo)
    return TestClient(app)


@pytest.fixture()
def session_payload() -> dict:
    return {
        "access_token": "access-abc",
        "refresh_token": "refresh-def",
        "expires_in": 3600,
        "expires_at": 1790000000,
        "token_type": "bearer",
    }
