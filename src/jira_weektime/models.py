"""Data models for JIRA Weektime."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WorkLogEntry:
    """A single worklog as reported by JIRA."""

    started_at: datetime
    time_spent: str  # e.g. "1d 2h"


@dataclass(frozen=True)
class Issue:
    """An assigned issue with its worklogs."""

    id: str
    key: str
    project_name: str
    summary: str
    worklogs: tuple[WorkLogEntry, ...] = ()


@dataclass
class IssueTimeSummary:
    """Time logged against one issue during the current week."""

    id: str
    key: str
    project: str
    summary: str
    minutes_this_week: int = 0


@dataclass
class WeeklySummary:
    """Result of aggregating worklogs for the current week."""

    by_issue: list[IssueTimeSummary]
    total_minutes: int
    week_start: datetime
    week_end: datetime
    malformed_entries: int = 0  # worklogs skipped because timeSpent didn't parse


@dataclass
class WorklogOutcome:
    """Outcome of an attempt to log work."""

    success: bool
    message: str
    minutes: int | None = None
    failure: str | None = None  # "invalid_duration" | "rejected"
