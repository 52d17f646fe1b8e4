"""Unit tests for task status mapping."""

from __future__ import annotations

import pytest

from fluxflow.core.tasks.status import (
    PersistedTaskStatus,
    TaskStatus,
    parse_status,
    to_persisted,
    to_ui,
)


class TestStatusMapping:
    """Tests for to_persisted and to_ui."""

    @pytest.mark.parametrize(
        ("ui", "persisted"),
        [
            (TaskStatus.TODO, PersistedTaskStatus.TO_DO),
            (TaskStatus.WIP, PersistedTaskStatus.DOING),
            (TaskStatus.DONE, PersistedTaskStatus.DONE),
        ],
    )
    def test_pairs(self, ui: TaskStatus, persisted: PersistedTaskStatus) -> None:
        """Test the fixed vocabulary pairs."""
        assert to_persisted(ui) is persisted
        assert to_ui(persisted) is ui

    @pytest.mark.parametrize("ui", list(TaskStatus))
    def test_ui_round_trip(self, ui: TaskStatus) -> None:
        """Test UI statuses survive a trip through storage."""
        assert to_ui(to_persisted(ui)) is ui

    @pytest.mark.parametrize("persisted", list(PersistedTaskStatus))
    def test_persisted_round_trip(self, persisted: PersistedTaskStatus) -> None:
        """Test stored statuses survive a trip through the UI."""
        assert to_persisted(to_ui(persisted)) is persisted

    def test_accepts_raw_strings(self) -> None:
        """Test plain string tags map like enum members."""
        assert to_persisted("wip") is PersistedTaskStatus.DOING
        assert to_ui("doing") is TaskStatus.WIP

    @pytest.mark.parametrize("value", ["in_progress", "", None, "DONE", "to_do"])
    def test_unknown_ui_falls_back(self, value: str | None) -> None:
        """Test unrecognized UI input maps to to_do."""
        assert to_persisted(value) is PersistedTaskStatus.TO_DO

    @pytest.mark.parametrize("value", ["blocked", "", None, "todo", "wip"])
    def test_unknown_persisted_falls_back(self, value: str | None) -> None:
        """Test unrecognized stored input maps to todo."""
        assert to_ui(value) is TaskStatus.TODO


class TestTaskStatus:
    """Tests for TaskStatus."""

    def test_labels(self) -> None:
        """Test column headings."""
        assert [s.label for s in TaskStatus] == ["To Do", "Doing", "Done"]

    def test_parse(self) -> None:
        """Test parse_status accepts only UI tags."""
        assert parse_status("done") is TaskStatus.DONE
        assert parse_status("doing") is None
        assert parse_status(None) is None
