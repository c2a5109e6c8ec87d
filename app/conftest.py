"""
Pytest configuration shared by every app in the project.

This module tunes settings for fast tests and auto-marks tests by file name.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken


def pytest_configure():
    """Adjust Django settings before tests run."""
    from django.conf import settings

    # Disable throttling during tests to prevent rate limit failures
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

    # The test client speaks plain HTTP
    settings.SECURE_SSL_REDIRECT = False

    # Use fast password hasher for tests (PBKDF2 is too slow with 870K iterations)
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_integration.py → e2e (full use-case workflows)
    - test_views.py, test_services.py, test_orchestrator.py, ... → integration
    - test_models.py, test_pricing.py, test_state_transitions.py, ... → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    e2e_patterns = ["test_integration.py"]

    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_orchestrator.py",
        "test_payment_ledger.py",
        "test_locks.py",
        "test_commands.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_pricing.py",
        "test_state_transitions.py",
        "test_types.py",
        "test_exceptions.py",
    ]

    for item in items:
        # Skip if test already has unit/integration/e2e marker
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in e2e_patterns):
            item.add_marker(pytest.mark.e2e)
        elif any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def api_client():
    """Unauthenticated DRF API client."""
    return APIClient()


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """A regular customer."""
    from core.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def other_user(db):
    """A second customer, for ownership checks."""
    from core.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def staff_user(db):
    """A staff member allowed to manage payments."""
    from core.tests.factories import UserFactory

    return UserFactory(is_staff=True)


# =============================================================================
# API Client Fixtures
# =============================================================================


def _client_for(user):
    client = APIClient()
    token = RefreshToken.for_user(user).access_token
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
    return client


@pytest.fixture
def authenticated_client(user):
    """API client carrying a JWT for ``user``."""
    return _client_for(user)


@pytest.fixture
def other_client(other_user):
    """API client carrying a JWT for ``other_user``."""
    return _client_for(other_user)


@pytest.fixture
def staff_client(staff_user):
    """API client carrying a JWT for ``staff_user``."""
    return _client_for(staff_user)
