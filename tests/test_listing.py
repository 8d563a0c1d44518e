# =============================================================================
# tests/test_listing.py - Listing Query Tests
# =============================================================================
# Tests for fetch_page() against the in-memory Supabase double:
# - Default order, page size and page slicing
# - Name substring and exact status filters, absent vs blank parameters
# - Sort allow-lists and direction round trips
# =============================================================================

import pytest

from app.exceptions import FormValidationError, InvalidSortError
from core.models.common import ListQuery
from core.services.listing import PROJECT_LISTING, TASK_LISTING, USER_LISTING, fetch_page


@pytest.fixture
def projects(project_row):
    """Twelve projects inserted in order, so later rows are newer."""
    statuses = ["pending", "in_progress", "completed"]
    return [
        project_row(
            name=f"Project {i:02d}",
            status=statuses[i % 3],
            due_date=f"2025-01-{i + 1:02d}",
        )
        for i in range(12)
    ]


class TestDefaults:
    """Tests for listing without parameters."""

    def test_newest_first_ten_per_page(self, fake_db, projects):
        page = fetch_page(PROJECT_LISTING, ListQuery())

        assert page.total == 12
        assert len(page.items) == 10
        assert [row["id"] for row in page.items] == [p["id"] for p in reversed(projects)][:10]

    def test_second_page(self, fake_db, projects):
        page = fetch_page(PROJECT_LISTING, ListQuery(page=2))

        assert [row["name"] for row in page.items] == ["Project 01", "Project 00"]
        assert page.from_item == 11
        assert page.to_item == 12

    def test_page_past_the_end_is_empty(self, fake_db, projects):
        page = fetch_page(PROJECT_LISTING, ListQuery(page=9))

        assert page.items == []
        assert page.total == 12
        assert page.last_page == 2


class TestFilters:
    """Tests for the name and status filters."""

    def test_name_contains_case_insensitive(self, fake_db, project_row):
        project_row(name="Launch Website")
        project_row(name="PRELAUNCH checklist")
        project_row(name="Budget")

        page = fetch_page(PROJECT_LISTING, ListQuery(name="launch"))

        assert sorted(row["name"] for row in page.items) == ["Launch Website", "PRELAUNCH checklist"]

    def test_blank_name_is_no_filter(self, fake_db, projects):
        page = fetch_page(PROJECT_LISTING, ListQuery(name=""))

        assert page.total == 12

    def test_status_exact(self, fake_db, projects):
        page = fetch_page(PROJECT_LISTING, ListQuery(status="completed"))

        assert page.total == 4
        assert {row["status"] for row in page.items} == {"completed"}

    def test_filters_combine(self, fake_db, projects):
        page = fetch_page(PROJECT_LISTING, ListQuery(name="project 1", status="in_progress"))

        # Project 10 is the only "Project 1x" with index % 3 == 1
        assert [row["name"] for row in page.items] == ["Project 10"]

    def test_unknown_status_rejected(self, fake_db, projects):
        with pytest.raises(FormValidationError) as exc_info:
            fetch_page(PROJECT_LISTING, ListQuery(status="archived"))

        assert "status" in exc_info.value.errors

    def test_base_filters_always_apply(self, fake_db, project_row, task_row):
        first = project_row(name="First")
        second = project_row(name="Second")
        task_row(first["id"], name="A")
        task_row(second["id"], name="B")

        page = fetch_page(TASK_LISTING, ListQuery(), base_filters={"project_id": second["id"]})

        assert [row["name"] for row in page.items] == ["B"]

    def test_user_email_filter(self, fake_db, user, other_user):
        page = fetch_page(USER_LISTING, ListQuery(email="CHARLES"))

        assert [row["id"] for row in page.items] == [other_user["id"]]

    def test_status_ignored_for_users(self, fake_db, user, other_user):
        page = fetch_page(USER_LISTING, ListQuery(status="pending"))

        assert page.total == 2


class TestSorting:
    """Tests for sort fields and directions."""

    def test_sort_by_name_ascending(self, fake_db, project_row):
        for name in ["Charlie", "alpha", "Bravo"]:
            project_row(name=name)

        page = fetch_page(PROJECT_LISTING, ListQuery(sort_field="name", sort_direction="asc"))

        # Ordering is by raw value; the database collation decides case handling
        assert [row["name"] for row in page.items] == sorted(["Charlie", "alpha", "Bravo"])

    def test_toggle_round_trip_restores_order(self, fake_db, projects):
        query = ListQuery().with_sort("due_date")
        ascending = [row["id"] for row in fetch_page(PROJECT_LISTING, query).items]

        query = query.with_sort("due_date")
        descending = [row["id"] for row in fetch_page(PROJECT_LISTING, query).items]

        query = query.with_sort("due_date")
        again = [row["id"] for row in fetch_page(PROJECT_LISTING, query).items]

        assert ascending == [p["id"] for p in projects][:10]
        assert descending == [p["id"] for p in reversed(projects)][:10]
        assert again == ascending

    def test_ties_broken_by_id(self, fake_db, project_row):
        rows = [project_row(name=f"Same {i}", status="pending") for i in range(3)]

        page = fetch_page(PROJECT_LISTING, ListQuery(sort_field="status", sort_direction="asc"))

        assert [row["id"] for row in page.items] == [r["id"] for r in rows]

    def test_sort_field_outside_allow_list(self, fake_db, projects):
        with pytest.raises(InvalidSortError) as exc_info:
            fetch_page(PROJECT_LISTING, ListQuery(sort_field="password"))

        assert exc_info.value.status_code == 422
        assert "sort_field" in exc_info.value.details["errors"]

    def test_task_only_sort_field_rejected_for_projects(self, fake_db, projects):
        with pytest.raises(InvalidSortError):
            fetch_page(PROJECT_LISTING, ListQuery(sort_field="project_id"))

    def test_bad_direction(self, fake_db, projects):
        with pytest.raises(InvalidSortError) as exc_info:
            fetch_page(PROJECT_LISTING, ListQuery(sort_direction="sideways"))

        assert "sort_direction" in exc_info.value.details["errors"]

    def test_no_query_runs_for_rejected_sort(self, fake_db, projects):
        fake_db.executed.clear()

        with pytest.raises(InvalidSortError):
            fetch_page(USER_LISTING, ListQuery(sort_field="password"))

        assert fake_db.executed == []
