import sys
from pathlib import Path
from unittest.mock import MagicMock

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `core.config`) works during pytest collection regardless of
# where pytest is invoked from.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest
from infrastructure.operations import OperationResult
from tests.factories.matches import (
    make_intent,
    make_match_row,
    make_snapshot,
)


@pytest.fixture
def match_row():
    return make_match_row()


@pytest.fixture
def snapshot():
    return make_snapshot()


@pytest.fixture
def intent():
    return make_intent()


@pytest.fixture
def match_lookup(snapshot):
    """Lookup returning the default snapshot for any match id."""
    return MagicMock(return_value=snapshot)


@pytest.fixture
def subscription_lookup():
    """Lookup returning two distinct subscriber tokens."""
    return MagicMock(
        return_value=[{"token": "token-aaaaaaaaaaaa"}, {"token": "token-bbbbbbbbbbbb"}]
    )


@pytest.fixture
def credential_provider():
    provider = MagicMock()
    provider.get_access_token.return_value = "access-token"
    return provider


@pytest.fixture
def send_fn():
    """Send function that accepts every token."""
    return MagicMock(return_value=OperationResult.success(data={"name": "msg"}))
