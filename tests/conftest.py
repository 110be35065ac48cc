"""Shared fixtures for contest tracker tests."""

from datetime import datetime

import pytest

from tests.factories import NOW, make_contest


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def contest_factory():
    return make_contest
