from datetime import datetime, timezone
from pathlib import Path

import pytest

from datesorter.config import SortConfig
from datesorter.errors import TimestampReadError
from datesorter.models import EventKind, FileDateType, FileTimestamps, FileToMove, GroupBy
from datesorter.planner import MovePlanner, group_folder_for, should_move

SRC = Path("/src")
DEST = Path("/dest")


def utc(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def stamps(created: str, modified: str = None, accessed: str = None) -> FileTimestamps:
    return FileTimestamps(
        created=utc(created),
        modified=utc(modified or created),
        accessed=utc(accessed or created),
    )


def fake_reader(table):
    def read(path: Path) -> FileTimestamps:
        value = table[path]
        if isinstance(value, Exception):
            raise value
        return value
    return read


def plan_for(table, now, events=None, **options):
    config = SortConfig(source=SRC, destination=DEST, **options)
    planner = MovePlanner(config, utc(now), read_timestamps=fake_reader(table),
                          on_event=events.append if events is not None else None)
    return planner.build(list(table))


# should_move

def test_should_move_without_filters():
    assert should_move(utc("2025-01-01T12:00:00"), None, False, None, utc("2025-06-15"))


def test_should_move_older_than_boundary_is_exclusive():
    now, cutoff = utc("2025-06-15"), utc("2025-03-01")
    assert should_move(utc("2025-02-15T12:00:00"), None, False, cutoff, now)
    assert not should_move(utc("2025-03-15T12:00:00"), None, False, cutoff, now)
    assert not should_move(cutoff, None, False, cutoff, now)


@pytest.mark.parametrize("group_by, previous, current", [
    (GroupBy.WEEK, "2025-06-08", "2025-06-14"),
    (GroupBy.BIWEEKLY, "2025-06-01", "2025-06-09"),
    (GroupBy.MONTH, "2025-05-31", "2025-06-01"),
    (GroupBy.TRIMESTER, "2025-03-31", "2025-04-01"),
    (GroupBy.QUADRIMESTER, "2025-04-30", "2025-05-01"),
    (GroupBy.SEMESTER, "2024-12-31", "2025-01-01"),
    (GroupBy.YEAR, "2024-12-31", "2025-01-01"),
])
def test_should_move_previous_period_only(group_by, previous, current):
    now = utc("2025-06-15")
    assert should_move(utc(previous), group_by, True, None, now)
    assert not should_move(utc(current), group_by, True, None, now)
    assert not should_move(utc("2026-01-15"), group_by, True, None, now)


def test_should_move_combined_filters():
    now, cutoff = utc("2025-06-15"), utc("2025-05-20")
    assert should_move(utc("2025-05-10"), GroupBy.MONTH, True, cutoff, now)
    assert not should_move(utc("2025-05-25"), GroupBy.MONTH, True, cutoff, now)  # fails cutoff
    assert not should_move(utc("2025-06-01"), GroupBy.MONTH, True, utc("2025-07-01"), now)  # fails period
    assert not should_move(utc("2025-06-10"), GroupBy.MONTH, True, cutoff, now)  # fails both


def test_should_move_previous_period_only_without_group_by_is_inert():
    now = utc("2025-06-15")
    assert should_move(now, None, True, None, now)


def test_group_folder_for():
    assert group_folder_for(utc("2025-05-01"), None) is None
    assert group_folder_for(utc("2025-05-01"), GroupBy.MONTH) == "2025-05"


# MovePlanner

def test_plan_moves_previous_month_file_into_group_folder():
    table = {SRC / "a" / "note.md": stamps("2025-05-01")}
    plan = plan_for(table, "2025-06-15", group_by=GroupBy.MONTH, previous_period_only=True)
    assert plan.entries == [FileToMove(SRC / "a" / "note.md", DEST / "2025-05" / "a" / "note.md")]


def test_plan_is_empty_when_file_is_in_current_month():
    table = {SRC / "a" / "note.md": stamps("2025-05-01")}
    plan = plan_for(table, "2025-05-20", group_by=GroupBy.MONTH, previous_period_only=True)
    assert len(plan) == 0
    assert plan.skipped == 1


def test_plan_without_grouping_keeps_relative_layout():
    table = {SRC / "x" / "y" / "z.txt": stamps("2020-01-01")}
    plan = plan_for(table, "2025-06-15")
    assert plan.entries == [FileToMove(SRC / "x" / "y" / "z.txt", DEST / "x" / "y" / "z.txt")]


def test_plan_respects_age_cutoff():
    table = {
        SRC / "old.txt": stamps("2025-02-28T23:59:59"),
        SRC / "edge.txt": stamps("2025-03-01"),
        SRC / "new.txt": stamps("2025-04-01"),
    }
    plan = plan_for(table, "2025-06-15", older_than=utc("2025-03-01"))
    assert [e.source.name for e in plan] == ["old.txt"]
    assert plan.skipped == 2


def test_plan_uses_most_recent_requested_timestamp():
    table = {SRC / "f.txt": stamps("2025-01-01", modified="2025-06-10", accessed="2025-01-01")}
    cutoff = utc("2025-03-01")
    only_created = plan_for(table, "2025-06-15", older_than=cutoff,
                            file_date_types=[FileDateType.CREATED])
    assert len(only_created) == 1
    default_types = plan_for(table, "2025-06-15", older_than=cutoff)
    assert len(default_types) == 0


def test_plan_groups_by_effective_date():
    table = {SRC / "f.txt": stamps("2024-12-30", modified="2025-01-02")}
    plan = plan_for(table, "2025-06-15", group_by=GroupBy.YEAR)
    assert plan.entries[0].destination == DEST / "2025" / "f.txt"


def test_plan_previous_period_only_without_group_by_moves_everything():
    table = {SRC / "today.txt": stamps("2025-06-15")}
    plan = plan_for(table, "2025-06-15", previous_period_only=True)
    assert len(plan) == 1


def test_plan_skips_ignored_paths():
    table = {
        SRC / "skip" / "a.txt": stamps("2020-01-01"),
        SRC / "skipper" / "b.txt": stamps("2020-01-01"),
        SRC / "c.txt": stamps("2020-01-01"),
    }
    events = []
    plan = plan_for(table, "2025-06-15", events, ignored_paths=[SRC / "skip"])
    assert [e.source.name for e in plan] == ["b.txt", "c.txt"]
    assert events[0].kind is EventKind.IGNORED
    assert events[0].path == SRC / "skip" / "a.txt"


def test_plan_continues_after_unreadable_file():
    table = {
        SRC / "first.txt": stamps("2020-01-01"),
        SRC / "broken.txt": TimestampReadError("permission denied"),
        SRC / "last.txt": stamps("2020-01-01"),
    }
    events = []
    plan = plan_for(table, "2025-06-15", events)
    assert [e.source.name for e in plan] == ["first.txt", "last.txt"]
    assert plan.failed == 1
    failed = [e for e in events if e.kind is EventKind.FAILED]
    assert len(failed) == 1
    assert "permission denied" in failed[0].reason


def test_plan_reports_file_outside_source_root():
    table = {
        Path("/elsewhere/stray.txt"): stamps("2020-01-01"),
        SRC / "ok.txt": stamps("2020-01-01"),
    }
    events = []
    plan = plan_for(table, "2025-06-15", events)
    assert [e.source.name for e in plan] == ["ok.txt"]
    assert plan.failed == 1
    assert [e.kind for e in events] == [EventKind.FAILED, EventKind.INCLUDED]


def test_plan_preserves_traversal_order():
    names = ["z.txt", "a.txt", "m.txt", "b.txt"]
    table = {SRC / n: stamps("2020-01-01") for n in names}
    plan = plan_for(table, "2025-06-15")
    assert [e.source.name for e in plan] == names


def test_included_event_carries_destination():
    table = {SRC / "a.txt": stamps("2025-01-06")}
    events = []
    plan_for(table, "2025-06-15", events, group_by=GroupBy.WEEK)
    assert events[0].kind is EventKind.INCLUDED
    assert events[0].destination == DEST / "2025-W02" / "a.txt"
