"""Conftest for pytest configuration."""

import copy

import pytest

PROJECT_PAYLOADS = [
    {
        "id": 1,
        "title": "Test Project 1",
        "description": "Test Description 1",
        "status": "IN_PROGRESS",
        "startDate": "2024-03-01",
        "endDate": "2024-04-01",
        "deadline": "2024-03-15",
        "deadlineStatus": "ON_TRACK",
        "reminderSent": False,
        "owner": {
            "id": 1,
            "username": "testuser",
            "email": "test@example.com",
            "firstName": "Test",
            "lastName": "User",
        },
    },
    {
        "id": 2,
        "title": "Test Project 2",
        "description": "Test Description 2",
        "status": "COMPLETED",
        "startDate": "2024-02-01",
        "endDate": "2024-03-01",
        "deadline": "2024-02-15",
        "deadlineStatus": "ON_TRACK",
        "reminderSent": False,
        "owner": {
            "id": 1,
            "username": "testuser",
            "email": "test@example.com",
            "firstName": "Test",
            "lastName": "User",
        },
    },
]


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests (requires running backend)",
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if config.getoption("--integration"):
        return

    skip_integration = pytest.mark.skip(reason="need --integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.respm and the caller's environment."""
    config_dir = tmp_path / "respm-config"
    monkeypatch.setenv("RESPM_CONFIG_DIR", str(config_dir))
    for name in ("RESPM_SERVER", "RESPM_TIMEOUT", "RESPM_USER_ID"):
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture
def project_payloads():
    """Backend JSON for two projects, a fresh copy per test."""
    return copy.deepcopy(PROJECT_PAYLOADS)
