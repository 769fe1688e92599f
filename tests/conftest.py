"""
Shared fixtures: every test gets its own app around a fresh in-memory store,
so no state leaks between tests and nothing talks to Firebase.
"""

import pytest

from config import TestConfig
from schoolboard import create_app
from schoolboard.services.storage import PlaceholderResolver
from schoolboard.models import SchoolSettings
from schoolboard.store import InMemoryStore


@pytest.fixture
def store():
    return InMemoryStore(SchoolSettings(schoolName=TestConfig.DEFAULT_SCHOOL_NAME,
                                        schoolLogo=TestConfig.DEFAULT_SCHOOL_LOGO))


@pytest.fixture
def resolver():
    return PlaceholderResolver(TestConfig.PLACEHOLDER_STORAGE_URL)


@pytest.fixture
def app(store, resolver):
    return create_app(TestConfig, store=store, resolver=resolver)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def teacher():
    return {'id': 't1', 'name': 'Ms. Frizzle'}
