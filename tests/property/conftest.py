"""Shared fixtures for the property tests."""

import pytest

from string_encoding import policies


@pytest.fixture
def policy_registry():
    """Give a test freedom to register policies; restore the registry afterwards."""
    saved = dict(policies._POLICIES)
    yield policies._POLICIES
    policies._POLICIES.clear()
    policies._POLICIES.update(saved)
