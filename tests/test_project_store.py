"""Tests for the project store."""

from unittest.mock import MagicMock, Mock, patch

import pydantic
import pytest
from respm.client import ResearchClient
from respm.exceptions import RequestError, TransportError
from respm.models import Project, ProjectDraft
from respm.status import ALL, DeadlineStatus, LoadPhase, ProjectStatus
from respm.store import ProjectStore, filter_projects


@pytest.fixture
def projects(project_payloads):
    return [Project.model_validate(p) for p in project_payloads]


@pytest.fixture
def client():
    return MagicMock(spec=ResearchClient)


@pytest.fixture
def store(client):
    return ProjectStore(client)


@pytest.fixture
def loaded_store(store, client, projects):
    client.list_projects.return_value = projects
    store.fetch_all()
    return store


class TestInitialState:
    def test_initial_state(self, store):
        state = store.state
        assert state.items == ()
        assert state.is_loading is False
        assert state.error is None
        assert state.status_filter == ALL
        assert state.search_term == ""
        assert state.phase is LoadPhase.IDLE


class TestFetch:
    """Fetching through the real client with a mocked HTTP layer."""

    @patch("respm.client.requests.request")
    def test_fetch_success(self, mock_request, project_payloads):
        response = Mock(status_code=200, content=b"[...]")
        response.json.return_value = project_payloads
        mock_request.return_value = response

        store = ProjectStore(ResearchClient(server="http://test:8080"))
        result = store.fetch_all()

        state = store.state
        assert [p.to_payload()["title"] for p in state.items] == [
            "Test Project 1",
            "Test Project 2",
        ]
        assert list(state.items) == [Project.model_validate(p) for p in project_payloads]
        assert result == list(state.items)
        assert state.is_loading is False
        assert state.error is None
        assert state.phase is LoadPhase.READY

    @patch("respm.client.requests.request")
    def test_fetch_failure(self, mock_request):
        response = Mock(status_code=500, content=b"", text="", reason="Server Error")
        response.json.side_effect = ValueError("no body")
        mock_request.return_value = response

        store = ProjectStore(ResearchClient(server="http://test:8080"))
        assert store.fetch_all() is None

        state = store.state
        assert state.is_loading is False
        assert "HTTP error 500" in state.error
        assert state.items == ()
        assert state.phase is LoadPhase.FAILED

    def test_fetch_failure_keeps_previous_items(self, loaded_store, client, projects):
        client.list_projects.side_effect = TransportError("Request timeout")

        assert loaded_store.fetch_all() is None

        state = loaded_store.state
        assert list(state.items) == projects
        assert state.error == "Failed to fetch projects: Request timeout"

    def test_fetch_clears_previous_error(self, store, client, projects):
        client.list_projects.side_effect = [RequestError(500, "boom"), projects]

        store.fetch_all()
        assert store.state.error is not None
        store.fetch_all()
        assert store.state.error is None
        assert len(store.state.items) == 2

    def test_loading_while_request_in_flight(self, store, client, projects):
        seen = []

        def list_projects():
            seen.append(store.state)
            return projects

        client.list_projects.side_effect = list_projects
        store.fetch_all()

        assert seen[0].is_loading is True
        assert seen[0].error is None
        assert seen[0].phase is LoadPhase.LOADING
        assert store.state.is_loading is False

    def test_duplicate_ids_collapse(self, store, client, projects):
        newer = projects[0].model_copy(update={"title": "Newer"})
        client.list_projects.return_value = [projects[0], projects[1], newer]

        store.fetch_all()

        assert [p.id for p in store.state.items] == [1, 2]
        assert store.get(1).title == "Newer"

    def test_fetch_by_id_upserts(self, loaded_store, client, projects):
        refreshed = projects[1].model_copy(update={"title": "Refreshed"})
        third = projects[0].model_copy(update={"id": 3, "title": "Third"})

        client.get_project.return_value = refreshed
        assert loaded_store.fetch_by_id(2) == refreshed
        client.get_project.return_value = third
        loaded_store.fetch_by_id(3)

        assert [p.title for p in loaded_store.state.items] == [
            "Test Project 1",
            "Refreshed",
            "Third",
        ]

    def test_fetch_by_id_failure(self, loaded_store, client):
        client.get_project.side_effect = RequestError(404, "Not Found")

        assert loaded_store.fetch_by_id(9) is None
        assert "404" in loaded_store.state.error
        assert len(loaded_store.state.items) == 2


class TestMutations:
    def test_create_appends(self, loaded_store, client, projects):
        created = projects[0].model_copy(update={"id": 3, "title": "New"})
        client.create_project.return_value = created
        draft = ProjectDraft(title="New", start_date="2024-01-01", end_date="2024-02-01")

        assert loaded_store.create(draft) == created
        client.create_project.assert_called_once_with(draft)
        assert [p.id for p in loaded_store.state.items] == [1, 2, 3]

    def test_create_failure_leaves_items(self, loaded_store, client):
        client.create_project.side_effect = RequestError(400, "Title is required")
        draft = ProjectDraft(title="X", start_date="2024-01-01", end_date="2024-02-01")

        assert loaded_store.create(draft) is None
        assert len(loaded_store.state.items) == 2
        assert "Title is required" in loaded_store.state.error

    def test_update_replaces_entry(self, loaded_store, client, projects):
        server_copy = projects[0].model_copy(
            update={"title": "Edited", "updated_at": "2024-03-05"}
        )
        client.update_project.return_value = server_copy

        loaded_store.update(projects[0].model_copy(update={"title": "Edited"}))

        assert loaded_store.get(1) == server_copy
        assert loaded_store.get(2) == projects[1]

    def test_update_unknown_id_is_noop(self, loaded_store, client, projects):
        stranger = projects[0].model_copy(update={"id": 42})
        client.update_project.return_value = stranger

        assert loaded_store.update(stranger) == stranger
        assert list(loaded_store.state.items) == projects

    def test_update_status_replaces_whole_entity(
        self, loaded_store, client, project_payloads
    ):
        server_payload = dict(
            project_payloads[0],
            status="COMPLETED",
            deadlineStatus="OVERDUE",
            description="Closed by server",
            updatedAt="2024-03-20",
        )
        client.update_project_status.return_value = Project.model_validate(server_payload)

        loaded_store.update_status(1, ProjectStatus.COMPLETED)

        item = loaded_store.get(1)
        client.update_project_status.assert_called_once_with(1, ProjectStatus.COMPLETED)
        assert item.status is ProjectStatus.COMPLETED
        assert item.deadline_status is DeadlineStatus.OVERDUE
        assert item.description == "Closed by server"
        assert item == Project.model_validate(server_payload)

    def test_update_status_failure(self, loaded_store, client, projects):
        client.update_project_status.side_effect = RequestError(404, "Not Found")

        assert loaded_store.update_status(1, ProjectStatus.COMPLETED) is None
        assert loaded_store.get(1) == projects[0]
        assert loaded_store.state.error.startswith("Failed to update project status")

    def test_delete_removes_one(self, loaded_store, client, projects):
        assert loaded_store.delete(2) is True
        client.delete_project.assert_called_once_with(2)
        assert list(loaded_store.state.items) == [projects[0]]

    def test_delete_failure(self, loaded_store, client):
        client.delete_project.side_effect = TransportError("Failed to connect")

        assert loaded_store.delete(2) is False
        assert len(loaded_store.state.items) == 2
        assert loaded_store.state.phase is LoadPhase.FAILED


class TestFiltering:
    def test_filter_by_status(self, loaded_store):
        loaded_store.set_status_filter(ProjectStatus.IN_PROGRESS)
        result = loaded_store.filtered_projects()

        assert len(result) == 1
        assert result[0].status is ProjectStatus.IN_PROGRESS

    def test_filter_all(self, loaded_store):
        loaded_store.set_status_filter("ALL")
        assert len(loaded_store.filtered_projects()) == 2

    def test_filter_accepts_strings(self, loaded_store):
        loaded_store.set_status_filter("completed")
        assert loaded_store.state.status_filter is ProjectStatus.COMPLETED
        assert [p.id for p in loaded_store.filtered_projects()] == [2]

    def test_invalid_filter_rejected(self, loaded_store):
        with pytest.raises(ValueError):
            loaded_store.set_status_filter("DRAFT")
        assert loaded_store.state.status_filter == ALL

    def test_search_title(self, loaded_store):
        loaded_store.set_search_term("Project 1")
        result = loaded_store.filtered_projects()

        assert len(result) == 1
        assert "Project 1" in result[0].title

    def test_search_description_case_insensitive(self, loaded_store):
        loaded_store.set_search_term("description 2")
        result = loaded_store.filtered_projects()

        assert len(result) == 1
        assert result[0].id == 2

    def test_combined_filters(self, loaded_store):
        loaded_store.set_status_filter(ProjectStatus.IN_PROGRESS)
        loaded_store.set_search_term("Project 1")
        result = loaded_store.filtered_projects()

        assert len(result) == 1
        assert result[0].id == 1

    def test_no_match_is_empty(self, loaded_store):
        loaded_store.set_status_filter(ProjectStatus.IN_PROGRESS)
        loaded_store.set_search_term("nonexistent")

        assert loaded_store.filtered_projects() == []
        assert loaded_store.state.error is None

    def test_filtering_is_idempotent_and_pure(self, loaded_store):
        loaded_store.set_status_filter(ProjectStatus.COMPLETED)
        loaded_store.set_search_term("test")
        items_before = loaded_store.state.items

        first = loaded_store.filtered_projects()
        second = loaded_store.filtered_projects()

        assert first == second
        assert loaded_store.state.items == items_before

    def test_filter_projects_function(self, projects):
        assert filter_projects(projects) == projects
        assert filter_projects(projects, ALL, "PROJECT 2") == [projects[1]]


class TestSequencing:
    """A response to a superseded command must not overwrite newer state."""

    def test_stale_fetch_is_discarded(self, store, client, projects):
        calls = []

        def list_projects():
            calls.append(1)
            if len(calls) == 1:
                # A second fetch is issued and resolves first
                store.fetch_all()
                return projects
            return [projects[1]]

        client.list_projects.side_effect = list_projects
        result = store.fetch_all()

        assert list(store.state.items) == [projects[1]]
        assert result == [projects[1]]
        assert store.state.is_loading is False

    def test_stale_failure_does_not_set_error(self, store, client, projects):
        calls = []

        def list_projects():
            calls.append(1)
            if len(calls) == 1:
                store.fetch_all()
                raise TransportError("Request timeout")
            return projects

        client.list_projects.side_effect = list_projects
        store.fetch_all()

        assert store.state.error is None
        assert store.state.phase is LoadPhase.READY
        assert len(store.state.items) == 2

    def test_stale_mutation_is_still_applied(self, loaded_store, client, projects):
        completed = projects[0].model_copy(update={"status": ProjectStatus.COMPLETED})

        def update_status(project_id, status):
            client.get_project.return_value = projects[1]
            loaded_store.fetch_by_id(2)
            return completed

        client.update_project_status.side_effect = update_status
        loaded_store.update_status(1, ProjectStatus.COMPLETED)

        assert loaded_store.get(1).status is ProjectStatus.COMPLETED
        assert loaded_store.state.is_loading is False


class TestListeners:
    def test_subscribe_and_unsubscribe(self, store, client, projects):
        snapshots = []
        unsubscribe = store.subscribe(snapshots.append)
        client.list_projects.return_value = projects

        store.fetch_all()
        assert [s.phase for s in snapshots] == [LoadPhase.LOADING, LoadPhase.READY]

        unsubscribe()
        store.set_search_term("x")
        assert len(snapshots) == 2

    def test_close_resets_state(self, loaded_store):
        snapshots = []
        loaded_store.subscribe(snapshots.append)

        loaded_store.close()
        loaded_store.set_search_term("x")

        assert loaded_store.state.items == ()
        assert snapshots == []

    def test_failing_listener_does_not_break_commands(self, store, client, projects):
        calls = []

        def listener(snapshot):
            calls.append(snapshot.phase)
            if len(calls) == 1:
                raise RuntimeError("listener failed")

        store.subscribe(listener)
        client.list_projects.return_value = projects

        assert store.fetch_all() == projects

        client.list_projects.assert_called_once_with()
        assert calls == [LoadPhase.LOADING, LoadPhase.READY]
        assert store.state.is_loading is False
        assert store.state.phase is LoadPhase.READY
        assert len(store.state.items) == 2


class TestSnapshots:
    def test_projects_handed_out_are_frozen(self, loaded_store):
        before = loaded_store.state

        with pytest.raises(pydantic.ValidationError):
            loaded_store.filtered_projects()[0].status = ProjectStatus.CANCELLED

        assert before.items[0].status is ProjectStatus.IN_PROGRESS
        assert loaded_store.get(1).status is ProjectStatus.IN_PROGRESS
