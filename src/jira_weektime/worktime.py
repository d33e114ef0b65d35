"""Weekly worklog aggregation and work logging."""

import logging
from datetime import date, datetime

from jira import JIRAError

from jira_weektime.config import config_exists, load_config
from jira_weektime.duration import format_duration, parse_duration
from jira_weektime.exceptions import (
    ConfigNotFoundError,
    InvalidConfigError,
    InvalidDurationError,
    IssueFetchError,
    JiraAuthError,
    JiraConnectionError,
    JiraRateLimitError,
    WorklogRejectedError,
)
from jira_weektime.jira_client import (
    AuthenticationError,
    JiraClient,
    RateLimitError,
)
from jira_weektime.jira_client import (
    ConnectionError as JiraClientConnectionError,
)
from jira_weektime.models import (
    Issue,
    IssueTimeSummary,
    WeeklySummary,
    WorkLogEntry,
    WorklogOutcome,
)
from jira_weektime.week import in_window, week_bounds

logger = logging.getLogger(__name__)


def _parse_started(value) -> datetime | None:
    """Parse a JIRA worklog ``started`` timestamp."""
    if not value:
        return None
    text = str(value)
    try:
        # JIRA sends "2026-10-14T09:00:00.000+0000"
        return datetime.strptime(text, "%Y-%m-%dT%H:%M:%S.%f%z")
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def issue_from_raw(raw: dict) -> Issue:
    """Build an Issue from a raw JIRA issue dict.

    Worklogs without a readable ``started`` timestamp are dropped, since
    they cannot be placed in any week.
    """
    fields = raw.get("fields", {})
    worklogs: list[WorkLogEntry] = []

    for worklog in (fields.get("worklog") or {}).get("worklogs", []):
        started_at = _parse_started(worklog.get("started"))
        if started_at is None:
            logger.warning(
                "Skipping worklog %s on %s: unreadable start time %r",
                worklog.get("id", "?"), raw.get("key"), worklog.get("started"),
            )
            continue
        worklogs.append(WorkLogEntry(started_at=started_at, time_spent=worklog.get("timeSpent", "")))

    return Issue(
        id=str(raw.get("id", "")),
        key=raw.get("key", ""),
        project_name=(fields.get("project") or {}).get("name", ""),
        summary=fields.get("summary", ""),
        worklogs=tuple(worklogs),
    )


def summarize(issues: list[Issue], now: datetime | None = None) -> WeeklySummary:
    """Sum the time logged this week, per issue and in total.

    Issue order is preserved. A worklog whose ``time_spent`` cannot be parsed
    adds nothing and is counted in ``malformed_entries`` instead, so one bad
    historical record never hides the rest of the week.
    """
    week_start, week_end = week_bounds(now)
    by_issue: list[IssueTimeSummary] = []
    total_minutes = 0
    malformed = 0

    for issue in issues:
        item = IssueTimeSummary(
            id=issue.id,
            key=issue.key,
            project=issue.project_name,
            summary=issue.summary,
        )
        by_issue.append(item)

        for worklog in issue.worklogs:
            if not in_window(worklog.started_at, week_start, week_end):
                continue
            try:
                minutes = parse_duration(worklog.time_spent)
            except InvalidDurationError as e:
                logger.warning("Ignoring worklog on %s: %s", issue.key, e)
                malformed += 1
                continue
            item.minutes_this_week += minutes
            total_minutes += minutes

    return WeeklySummary(
        by_issue=by_issue,
        total_minutes=total_minutes,
        week_start=week_start,
        week_end=week_end,
        malformed_entries=malformed,
    )


def _get_client() -> JiraClient:
    """Load configuration and build a client.

    Raises:
        ConfigNotFoundError: If config file not found
        InvalidConfigError: If config is invalid
    """
    if not config_exists():
        raise ConfigNotFoundError(
            "Configuration not found. Create ~/.jira-weektime/config.toml to set up."
        )

    try:
        config = load_config()
    except ValueError as e:
        raise InvalidConfigError(f"Invalid configuration: {e}")

    return JiraClient(config)


def fetch_weekly_summary(now: datetime | None = None) -> WeeklySummary:
    """Fetch assigned, incomplete issues and summarise this week's worklogs.

    Raises:
        ConfigNotFoundError: If config file not found
        InvalidConfigError: If config is invalid
        JiraAuthError: If JIRA authentication fails
        JiraRateLimitError: If rate limited
        JiraConnectionError: If cannot connect
        IssueFetchError: For any other failure while searching
    """
    client = _get_client()

    try:
        raw_issues = client.search_assigned_incomplete_issues()
    except AuthenticationError:
        raise JiraAuthError(
            "JIRA authentication failed. Check your credentials in "
            "~/.jira-weektime/config.toml."
        )
    except RateLimitError:
        raise JiraRateLimitError(
            "JIRA rate limit exceeded. Please wait a moment and try again."
        )
    except JiraClientConnectionError as e:
        raise JiraConnectionError(str(e))
    except JIRAError as e:
        raise IssueFetchError(f"Could not fetch assigned issues: {e}") from e

    issues = [issue_from_raw(raw) for raw in raw_issues]
    return summarize(issues, now=now)


def log_work(
    issue_key: str,
    time_spent: str,
    started: date | None = None,
    comment: str | None = None,
) -> WorklogOutcome:
    """Validate ``time_spent`` and log it against ``issue_key``.

    Bad input and rejected writes come back as unsuccessful outcomes for the
    user to correct; nothing is sent to JIRA unless the duration parses.

    Raises:
        ConfigNotFoundError: If config file not found
        InvalidConfigError: If config is invalid
        JiraAuthError: If JIRA authentication fails
        JiraConnectionError: If cannot connect
    """
    try:
        minutes = parse_duration(time_spent)
    except InvalidDurationError as e:
        return WorklogOutcome(success=False, message=str(e), failure="invalid_duration")

    client = _get_client()

    try:
        client.add_worklog(issue_key, minutes, started=started, comment=comment)
    except AuthenticationError:
        raise JiraAuthError(
            "JIRA authentication failed. Check your credentials in "
            "~/.jira-weektime/config.toml."
        )
    except JiraClientConnectionError as e:
        raise JiraConnectionError(str(e))
    except WorklogRejectedError as e:
        logger.warning("JIRA rejected worklog for %s: %s", issue_key, e.status_code)
        return WorklogOutcome(
            success=False, message=str(e), minutes=minutes, failure="rejected"
        )

    return WorklogOutcome(
        success=True,
        message=f"{time_spent} of work logged for issue {issue_key}",
        minutes=minutes,
    )


def summary_to_dict(summary: WeeklySummary) -> dict:
    """Convert WeeklySummary to a JSON-serializable dict."""
    return {
        "week_start": summary.week_start.isoformat(),
        "week_end": summary.week_end.isoformat(),
        "total_minutes": summary.total_minutes,
        "total": format_duration(summary.total_minutes),
        "malformed_entries": summary.malformed_entries,
        "issues": [
            {
                "id": item.id,
                "key": item.key,
                "project": item.project,
                "summary": item.summary,
                "minutes": item.minutes_this_week,
                "time": format_duration(item.minutes_this_week),
            }
            for item in summary.by_issue
        ],
    }
