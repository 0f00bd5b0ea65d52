"""Shared fixtures: a fresh app on a temporary SQLite file per test."""

import pytest

from app import create_app
from utils.auth import generate_token
from utils.oracle import LocalQueryDispatcher

OWNER = "0xowner"
ORACLE = "0xoracle"
STRANGER = "0xsecond"

JWT_SECRET = "verse-oracle-test-secret-0123456789abcdef"

INITIAL_VERSE_PRICE = 15000000000000000
INITIAL_GAS_LIMIT = 500000


@pytest.fixture
def dispatcher():
    return LocalQueryDispatcher()


@pytest.fixture
def app(tmp_path, dispatcher):
    return create_app(
        {
            "TESTING": True,
            "DATABASE_URL": f"sqlite:///{tmp_path / 'verse_oracle.db'}",
            "OWNER_ADDRESS": OWNER,
            "ORACLE_ADDRESS": ORACLE,
            "INITIAL_VERSE_PRICE": INITIAL_VERSE_PRICE,
            "INITIAL_GAS_LIMIT": INITIAL_GAS_LIMIT,
            "JWT_SECRET": JWT_SECRET,
        },
        dispatcher=dispatcher,
    )


@pytest.fixture
def service(app):
    return app.extensions["verse_oracle"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def headers_for():
    def _headers(principal):
        return {"Authorization": f"Bearer {generate_token(principal, JWT_SECRET)}"}

    return _headers
