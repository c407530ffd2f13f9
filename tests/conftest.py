from __future__ import annotations

from pathlib import Path
import sys
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import ksstore` when the package is not installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


_ENV_VARS = (
    "KSSTORE_PROJECT",
    "GOOGLE_CLOUD_PROJECT",
    "KSSTORE_DATABASE",
    "KSSTORE_TABLE",
    "KSSTORE_TIMEOUT",
    "KSSTORE_QUERY_MATCH_ALL",
    "KSSTORE_DEBUG_LOG_REQUESTS",
)


def snapshot(doc_id: str, data: dict[str, Any] | None) -> SimpleNamespace:
    """Minimal stand-in for a Firestore DocumentSnapshot."""
    return SimpleNamespace(
        id=doc_id,
        exists=data is not None,
        to_dict=lambda: dict(data) if data is not None else None,
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """
    Strip store-related variables so tests never pick up the developer's environment.
    """
    for name in _ENV_VARS:
        # setenv first so monkeypatch restores the original state, including
        # anything load_dotenv() writes behind its back.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def memory_store():
    from ksstore.memory_store import InMemoryStore

    return InMemoryStore("users")


@pytest.fixture
def fs_client() -> MagicMock:
    return MagicMock(name="firestore.Client")


@pytest.fixture
def fs_store(fs_client: MagicMock):
    from ksstore.firestore_store import FirestoreStore

    return FirestoreStore(fs_client, "users", timeout=5.0)
