"""
AI Task Manager - Filter and Sort Engine Tests
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from ai_task_manager.tasks.enums import SortDirection, SortField, TaskPriority, TaskStatus
from ai_task_manager.tasks.filtering import (
    TaskFilter,
    TaskSort,
    apply_filters_and_sort,
    compute_task_stats,
    duration_bucket,
    filter_tasks,
    sort_tasks,
)


BASE_TIME = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def tasks(make_task):
    return [
        make_task(
            "Write report", task_id="a", created_at=BASE_TIME,
            priority=TaskPriority.HIGH, category="Work", due_date="2025-06-20",
            urgency=8, tags=["finance"], estimated_duration="2-3 hours",
        ),
        make_task(
            "Buy groceries", task_id="b", created_at=BASE_TIME + timedelta(hours=1),
            priority=TaskPriority.LOW, category="Shopping", due_date=None,
            urgency=3, estimated_duration="30 minutes",
        ),
        make_task(
            "Call mom", task_id="c", created_at=BASE_TIME + timedelta(hours=2),
            status=TaskStatus.COMPLETED, category="Family", due_date="2025-06-05",
            urgency=6,
        ),
        make_task(
            "Plan vacation", task_id="d", created_at=BASE_TIME + timedelta(hours=3),
            priority=TaskPriority.MEDIUM, category="Personal", due_date="2025-06-12",
            urgency=2, tags=["travel"], estimated_duration="3 days",
        ),
    ]


def ids(tasks):
    return [t.id for t in tasks]


class TestFilterTasks:
    """Tests for search and filter predicates."""

    def test_all_wildcards_keep_everything(self, tasks):
        assert len(filter_tasks(tasks, TaskFilter(), "")) == len(tasks)

    def test_blank_query_matches_everything(self, tasks):
        assert len(filter_tasks(tasks, TaskFilter(), "   ")) == len(tasks)

    def test_search_title_case_insensitive(self, tasks):
        assert ids(filter_tasks(tasks, TaskFilter(), "REPORT")) == ["a"]

    def test_search_category(self, tasks):
        assert ids(filter_tasks(tasks, TaskFilter(), "shop")) == ["b"]

    def test_search_tags(self, tasks):
        assert ids(filter_tasks(tasks, TaskFilter(), "trav")) == ["d"]

    def test_status_filter(self, tasks):
        assert ids(filter_tasks(tasks, TaskFilter(status="completed"))) == ["c"]

    def test_priority_filter(self, tasks):
        assert ids(filter_tasks(tasks, TaskFilter(priority="high"))) == ["a"]

    def test_category_filter_is_exact(self, tasks):
        assert ids(filter_tasks(tasks, TaskFilter(category="Work"))) == ["a"]
        assert filter_tasks(tasks, TaskFilter(category="work")) == []

    def test_filters_combine(self, tasks):
        result = filter_tasks(tasks, TaskFilter(status="pending", priority="medium"), "plan")
        assert ids(result) == ["d"]


class TestSortTasks:
    """Tests for total ordering of the view."""

    def test_due_date_ascending_missing_last(self, tasks):
        result = sort_tasks(tasks, TaskSort(SortField.DUE_DATE, SortDirection.ASC))
        assert ids(result) == ["d", "a", "b", "c"]

    def test_due_date_descending_missing_still_last(self, tasks):
        result = sort_tasks(tasks, TaskSort(SortField.DUE_DATE, SortDirection.DESC))
        assert ids(result) == ["a", "d", "b", "c"]

    def test_priority_descending(self, tasks):
        result = sort_tasks(tasks, TaskSort(SortField.PRIORITY, SortDirection.DESC))
        assert ids(result) == ["a", "d", "b", "c"]

    def test_urgency_ascending(self, tasks):
        result = sort_tasks(tasks, TaskSort(SortField.URGENCY, SortDirection.ASC))
        assert ids(result) == ["d", "b", "a", "c"]

    def test_created_at_descending(self, tasks):
        result = sort_tasks(tasks, TaskSort(SortField.CREATED_AT, SortDirection.DESC))
        assert ids(result) == ["d", "b", "a", "c"]

    def test_estimated_duration_ascending(self, tasks):
        result = sort_tasks(tasks, TaskSort(SortField.ESTIMATED_DURATION, SortDirection.ASC))
        assert ids(result) == ["b", "a", "d", "c"]

    def test_ties_broken_by_id(self, make_task):
        tied = [make_task("x", task_id=i, urgency=5) for i in ("z", "m", "a")]
        result = sort_tasks(tied, TaskSort(SortField.URGENCY, SortDirection.DESC))
        assert ids(result) == ["a", "m", "z"]

    def test_completed_after_pending_despite_due_date(self, make_task):
        """Completed task due 2025 sorts after pending task due 2030."""
        done = make_task("Done", task_id="1", status=TaskStatus.COMPLETED, due_date="2025-01-01")
        open_ = make_task("Open", task_id="2", due_date="2030-01-01")

        result = sort_tasks([done, open_], TaskSort(SortField.DUE_DATE, SortDirection.ASC))
        assert ids(result) == ["2", "1"]

    @pytest.mark.parametrize("field", list(SortField))
    @pytest.mark.parametrize("direction", list(SortDirection))
    def test_completed_always_last(self, tasks, field, direction):
        result = sort_tasks(tasks, TaskSort(field, direction))
        flags = [t.is_completed for t in result]
        assert flags == sorted(flags)

    @pytest.mark.parametrize("field", list(SortField))
    def test_idempotent(self, tasks, field):
        task_sort = TaskSort(field, SortDirection.ASC)
        first = apply_filters_and_sort(tasks, TaskFilter(), task_sort, "")
        second = apply_filters_and_sort(list(reversed(tasks)), TaskFilter(), task_sort, "")
        assert ids(first) == ids(second)
        assert ids(apply_filters_and_sort(first, TaskFilter(), task_sort, "")) == ids(first)


class TestDurationBucket:
    @pytest.mark.parametrize("value,expected", [
        (None, 0),
        ("", 0),
        ("45 minutes", 1),
        ("1-2 hours", 2),
        ("2 days", 3),
        ("a while", 0),
    ])
    def test_buckets(self, value, expected):
        assert duration_bucket(value) == expected


class TestTaskStats:
    def test_counts(self, tasks):
        stats = compute_task_stats(tasks, date(2025, 6, 15))

        assert stats.total == 4
        assert stats.pending == 3
        assert stats.completed == 1
        # "d" is due 2025-06-12 and still open; "c" is past due but completed
        assert stats.overdue == 1

    def test_empty(self):
        stats = compute_task_stats([], date(2025, 6, 15))
        assert (stats.total, stats.pending, stats.completed, stats.overdue) == (0, 0, 0, 0)
