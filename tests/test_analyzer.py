"""
AI Task Manager - Task Analyzer Tests

Structured extraction, due date repair and the fallback analysis.
"""

import json
from datetime import date

import pytest

from ai_task_manager.analysis.analyzer import (
    TaskAnalyzer,
    is_implausible_due_date,
    parse_iso_date,
    repair_due_date,
    replacement_due_date,
)
from ai_task_manager.tasks.enums import (
    TaskPriority,
    Complexity,
    TimeSensitivity,
    WorkContext,
    EnergyLevel,
    SocialContext,
)


REFERENCE = date(2025, 6, 10)


def analysis_backend(make_backend, payload):
    content = payload if isinstance(payload, str) else json.dumps(payload)
    return make_backend(lambda s, u, o: content)


class TestDueDateRepair:
    """Tests for implausible due date detection and replacement."""

    def test_past_year_high_priority(self):
        """2022-01-01 with high priority becomes reference + 2 days."""
        assert repair_due_date("2022-01-01", REFERENCE, TaskPriority.HIGH) == "2025-06-12"

    def test_medium_priority_offset(self):
        assert repair_due_date("2025-06-01", REFERENCE, TaskPriority.MEDIUM) == "2025-06-17"

    def test_low_priority_offset(self):
        assert repair_due_date("2024-12-31", REFERENCE, TaskPriority.LOW) == "2025-06-24"

    def test_rolls_to_next_month(self):
        reference = date(2025, 6, 25)
        assert repair_due_date("2025-06-01", reference, TaskPriority.MEDIUM) == "2025-07-01"

    def test_rolls_over_year_end(self):
        reference = date(2025, 12, 30)
        assert repair_due_date("2020-05-05", reference, TaskPriority.HIGH) == "2026-01-01"

    def test_last_day_of_month(self):
        """Offset landing exactly on the last day stays in the month."""
        assert replacement_due_date(date(2025, 6, 28), TaskPriority.HIGH) == date(2025, 6, 30)

    def test_too_far_in_future(self):
        assert repair_due_date("2027-01-01", REFERENCE, TaskPriority.HIGH) == "2025-06-12"

    def test_next_year_is_plausible(self):
        assert repair_due_date("2026-03-15", REFERENCE, TaskPriority.LOW) == "2026-03-15"

    def test_reference_day_is_plausible(self):
        assert repair_due_date("2025-06-10", REFERENCE, TaskPriority.HIGH) == "2025-06-10"

    def test_invalid_calendar_date_repaired(self):
        assert repair_due_date("2025-02-30", REFERENCE, TaskPriority.HIGH) == "2025-06-12"

    def test_absent_due_date_stays_absent(self):
        assert repair_due_date(None, REFERENCE, TaskPriority.HIGH) is None

    @pytest.mark.parametrize("due", ["1999-12-31", "2025-06-09", "2025-01-20", "2024-06-10"])
    @pytest.mark.parametrize("priority", list(TaskPriority))
    def test_repaired_never_before_reference(self, due, priority):
        repaired = parse_iso_date(repair_due_date(due, REFERENCE, priority))
        assert repaired >= REFERENCE
        assert not is_implausible_due_date(repaired, REFERENCE)


class TestAnalyzeWithBackend:
    """Tests for the primary extraction path."""

    async def test_full_payload(self, make_backend):
        backend = analysis_backend(make_backend, {
            "title": "Prepare quarterly report",
            "priority": "high",
            "category": "Work & Meetings",
            "due_date": "2025-06-13",
            "urgency": 8,
            "importance": 9,
            "complexity": "complex",
            "tags": ["report", "finance"],
            "estimatedDuration": "2-4 hours",
            "subtasks": ["Collect numbers", "Draft summary"],
            "suggestedActions": ["Block time on calendar"],
            "confidence": 88,
            "timeSensitivity": "urgent",
            "workContext": "professional",
            "energyLevel": "high",
            "socialContext": "team",
            "toolsNeeded": ["Spreadsheet"],
            "blockers": ["Missing data"],
            "successCriteria": ["Report sent"],
        })
        analysis = await TaskAnalyzer(backend).analyze("prepare the quarterly report by friday", REFERENCE)

        assert analysis.title == "Prepare quarterly report"
        assert analysis.priority == TaskPriority.HIGH
        assert analysis.due_date == "2025-06-13"
        assert analysis.complexity == Complexity.COMPLEX
        assert analysis.estimated_duration == "2-4 hours"
        assert analysis.time_sensitivity == TimeSensitivity.URGENT
        assert analysis.work_context == WorkContext.PROFESSIONAL
        assert analysis.energy_level == EnergyLevel.HIGH
        assert analysis.social_context == SocialContext.TEAM
        assert analysis.tools_needed == ["Spreadsheet"]
        assert analysis.confidence == 88

    async def test_reference_date_injected(self, make_backend):
        backend = analysis_backend(make_backend, {"title": "x"})
        await TaskAnalyzer(backend).analyze("call the bank", REFERENCE)

        system, user, options = backend.calls[0]
        assert "Today's date: 2025-06-10" in system
        assert "call the bank" in user
        assert options.max_tokens == 3000

    async def test_missing_keys_get_defaults(self, make_backend):
        backend = analysis_backend(make_backend, {"title": "Water plants"})
        analysis = await TaskAnalyzer(backend).analyze("water plants", REFERENCE)

        assert analysis.priority == TaskPriority.MEDIUM
        assert analysis.category == "General"
        assert analysis.urgency == 5
        assert analysis.importance == 5
        assert analysis.complexity == Complexity.MODERATE
        assert analysis.confidence == 80
        assert analysis.time_sensitivity == TimeSensitivity.FLEXIBLE
        assert analysis.work_context == WorkContext.PERSONAL
        assert analysis.energy_level == EnergyLevel.MEDIUM
        assert analysis.social_context == SocialContext.SOLO
        assert analysis.tags == []
        assert analysis.blockers == []
        assert analysis.estimated_duration is None
        assert analysis.due_date is None

    async def test_invalid_values_normalized(self, make_backend):
        backend = analysis_backend(make_backend, {
            "title": "",
            "priority": "critical",
            "urgency": 42,
            "importance": "-3",
            "confidence": "high",
            "tags": "single-tag",
            "estimatedDuration": "null",
            "category": "  ",
        })
        analysis = await TaskAnalyzer(backend).analyze("fix the sink", REFERENCE)

        assert analysis.title == "fix the sink"
        assert analysis.priority == TaskPriority.MEDIUM
        assert analysis.urgency == 10
        assert analysis.importance == 1
        assert analysis.confidence == 80
        assert analysis.tags == ["single-tag"]
        assert analysis.estimated_duration is None
        assert analysis.category == "General"

    async def test_out_of_range_floats_take_defaults(self, make_backend):
        """Overflowing numbers keep the backend analysis and use the field defaults."""
        backend = analysis_backend(
            make_backend,
            '{"title": "Renew passport", "priority": "high", "category": "Travel",'
            ' "urgency": 1e999, "importance": -Infinity, "confidence": NaN}',
        )
        analysis = await TaskAnalyzer(backend).analyze("renew passport", REFERENCE)

        assert analysis.title == "Renew passport"
        assert analysis.priority == TaskPriority.HIGH
        assert analysis.category == "Travel"
        assert analysis.urgency == 5
        assert analysis.importance == 5
        assert analysis.confidence == 80
        assert analysis.blockers == []

    async def test_hallucinated_year_repaired(self, make_backend):
        backend = analysis_backend(make_backend, {"title": "Renew passport", "priority": "high", "due_date": "2022-01-01"})
        analysis = await TaskAnalyzer(backend).analyze("renew passport", REFERENCE)
        assert analysis.due_date == "2025-06-12"

    async def test_fenced_json_accepted(self, make_backend):
        backend = analysis_backend(make_backend, '```json\n{"title": "Pay rent", "priority": "low"}\n```')
        analysis = await TaskAnalyzer(backend).analyze("pay rent", REFERENCE)
        assert analysis.title == "Pay rent"
        assert analysis.priority == TaskPriority.LOW


class TestAnalyzeFallback:
    """Tests for the deterministic fallback analysis."""

    async def test_backend_failure(self, failing_backend):
        analysis = await TaskAnalyzer(failing_backend).analyze("Buy groceries", REFERENCE)

        assert analysis.title == "Buy groceries"
        assert analysis.priority == TaskPriority.MEDIUM
        assert analysis.category == "General"
        assert analysis.due_date == "2025-06-13"
        assert analysis.urgency == 5
        assert analysis.importance == 5
        assert analysis.complexity == Complexity.MODERATE
        assert analysis.confidence == 30
        assert analysis.blockers == ["AI analysis unavailable"]
        assert analysis.success_criteria == ["Task completed successfully"]
        assert len(analysis.suggested_actions) == 4
        assert "AI analysis unavailable" in analysis.context

    async def test_unparseable_output(self, make_backend):
        backend = analysis_backend(make_backend, "Sure! This task looks important.")
        analysis = await TaskAnalyzer(backend).analyze("Buy groceries", REFERENCE)
        assert analysis.confidence == 30

    async def test_unexpected_exception(self, make_backend):
        def explode(system, user, options):
            raise RuntimeError("socket closed")

        analysis = await TaskAnalyzer(make_backend(explode)).analyze("Buy groceries", REFERENCE)
        assert analysis.confidence == 30

    async def test_fallback_failure_returns_minimal_default(self, failing_backend, monkeypatch):
        def broken(text, reference_date):
            raise ValueError("bad reference date")

        monkeypatch.setattr(TaskAnalyzer, "fallback_analysis", staticmethod(broken))
        analysis = await TaskAnalyzer(failing_backend).analyze("Buy groceries", REFERENCE)

        assert analysis.title == "Buy groceries"
        assert analysis.confidence == 50
        assert analysis.due_date is None
        assert analysis.context is None
        assert analysis.blockers == []
