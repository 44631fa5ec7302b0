"""Integration tests for respm.

These tests require a running research project backend.
Run with: pytest tests/test_integration.py -v --integration

Environment variables:
  RESPM_TEST_SERVER: Backend URL (default: http://localhost:8080)
"""

import os
import uuid

import pytest
from click.testing import CliRunner
from respm.app import App
from respm.cli import cli
from respm.client import ResearchClient
from respm.exceptions import RequestError
from respm.models import ProjectDraft
from respm.status import ProjectStatus

# Skip if not running integration tests
pytestmark = pytest.mark.integration


@pytest.fixture(scope="module")
def server_url():
    """Get test server URL."""
    return os.environ.get("RESPM_TEST_SERVER", "http://localhost:8080")


@pytest.fixture(scope="module")
def client(server_url):
    """Create test client."""
    return ResearchClient(server=server_url, timeout=10)


@pytest.fixture
def app(client):
    with App(client) as app:
        yield app


@pytest.fixture
def runner(server_url):
    """Create CLI runner with environment."""
    return CliRunner(env={"RESPM_SERVER": server_url})


@pytest.fixture
def unique_title():
    """Generate unique project title for testing."""
    return f"test-{uuid.uuid4().hex[:8]}"


class TestServerConnection:
    """Test server connectivity."""

    def test_list_projects(self, client):
        assert isinstance(client.list_projects(), list)

    def test_missing_project(self, client):
        with pytest.raises(RequestError) as exc_info:
            client.get_project(999999999)
        assert exc_info.value.status_code in (400, 404, 500)


class TestProjectLifecycle:
    """Create, change and delete a project through the stores."""

    def test_lifecycle(self, app, unique_title):
        store = app.projects
        draft = ProjectDraft(
            title=unique_title,
            description="integration test",
            start_date="2024-01-01",
            end_date="2030-01-01",
            deadline="2030-01-01",
        )

        created = store.create(draft)
        assert created is not None, store.state.error
        try:
            assert created.title == unique_title

            updated = store.update_status(created.id, ProjectStatus.IN_PROGRESS)
            assert updated is not None, store.state.error
            assert updated.status is ProjectStatus.IN_PROGRESS

            history = app.client.get_status_history(created.id)
            assert any(h.new_status is ProjectStatus.IN_PROGRESS for h in history)

            store.fetch_all()
            store.set_search_term(unique_title)
            assert [p.id for p in store.filtered_projects()] == [created.id]
        finally:
            assert store.delete(created.id), store.state.error

        assert store.get(created.id) is None


class TestDashboard:
    def test_fetch_dashboard(self, app):
        assert app.dashboard.fetch_dashboard_data(), app.dashboard.state.error
        assert app.dashboard.state.stats.total_users >= 0


class TestCLIIntegration:
    def test_get(self, runner):
        result = runner.invoke(cli, ["get"])
        assert result.exit_code == 0

    def test_dashboard(self, runner):
        result = runner.invoke(cli, ["dashboard"])
        assert result.exit_code == 0
        assert "Total Users:" in result.output
