"""JIRA API client with retry logic."""

import logging
from datetime import date, datetime

from jira import JIRA, JIRAError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from jira_weektime.config import Config
from jira_weektime.exceptions import WorklogRejectedError

logger = logging.getLogger(__name__)

ASSIGNED_INCOMPLETE_JQL = "assignee = currentUser() AND statusCategory != Done"
ISSUE_FIELDS = ["summary", "project", "worklog"]


class RateLimitError(Exception):
    """Raised when JIRA API rate limit is hit."""

    pass


class AuthenticationError(Exception):
    """Raised when JIRA authentication fails."""

    pass


class ConnectionError(Exception):
    """Raised when JIRA server cannot be reached."""

    pass


class JiraClient:
    """Client for reading assigned issues and writing worklogs."""

    def __init__(self, config: Config) -> None:
        """Initialize JIRA client with configuration."""
        self.config = config
        self._client: JIRA | None = None

    def _get_client(self) -> JIRA:
        """Get or create JIRA client instance."""
        if self._client is None:
            try:
                self._client = JIRA(
                    server=self.config.jira_url,
                    basic_auth=(self.config.jira_email, self.config.jira_api_token),
                    timeout=self.config.timeout,
                )
            except JIRAError as e:
                if e.status_code == 401:
                    raise AuthenticationError(
                        "Authentication failed. Check your email and API token."
                    ) from e
                raise
            except Exception as e:
                error_msg = str(e).lower()
                if "connection" in error_msg or "resolve" in error_msg or "timeout" in error_msg:
                    raise ConnectionError(
                        f"Cannot connect to JIRA server at {self.config.jira_url}. "
                        "Check the URL and your network connection."
                    ) from e
                raise
        return self._client

    @retry(
        retry=retry_if_exception_type(RateLimitError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=60),
        reraise=True,
    )
    def search_assigned_incomplete_issues(self) -> list[dict]:
        """Fetch issues assigned to the current user that are not done.

        Each returned dict carries the issue's complete worklog list, even
        when JIRA only embedded the first page of it in the search result.

        Returns:
            List of raw issue dicts with ``id``, ``key`` and ``fields``

        Raises:
            RateLimitError: If rate limited (will be retried)
            AuthenticationError: If authentication fails
            JIRAError: For other JIRA API errors
        """
        client = self._get_client()

        try:
            result = client.enhanced_search_issues(
                ASSIGNED_INCOMPLETE_JQL,
                maxResults=0,
                fields=ISSUE_FIELDS,
            )
            return [self._issue_to_dict(issue) for issue in result]

        except JIRAError as e:
            if e.status_code == 429:
                raise RateLimitError(
                    "Rate limited by JIRA. Retrying with exponential backoff..."
                ) from e
            if e.status_code == 401:
                raise AuthenticationError(
                    "Authentication failed. Check your email and API token."
                ) from e
            raise

    def add_worklog(
        self,
        issue_key: str,
        minutes: int,
        started: date | None = None,
        comment: str | None = None,
    ) -> None:
        """Log ``minutes`` of work against an issue.

        ``started`` is sent as midnight of the given day.

        Raises:
            AuthenticationError: If authentication fails
            WorklogRejectedError: If JIRA refuses the worklog
        """
        client = self._get_client()

        started_at = None
        if started is not None:
            started_at = datetime(started.year, started.month, started.day)

        try:
            client.add_worklog(
                issue_key,
                timeSpentSeconds=minutes * 60,
                comment=comment or None,
                started=started_at,
            )
        except JIRAError as e:
            if e.status_code == 401:
                raise AuthenticationError(
                    "Authentication failed. Check your email and API token."
                ) from e
            raise WorklogRejectedError(e.status_code, e.text or "") from e

        logger.info("Logged %d minutes against %s", minutes, issue_key)

    def _issue_to_dict(self, issue) -> dict:
        """Convert JIRA issue object to dictionary, completing its worklogs."""
        fields = dict(issue.raw.get("fields", {}))
        worklog = fields.get("worklog") or {}
        embedded = worklog.get("worklogs", [])

        if worklog.get("total", 0) > len(embedded):
            logger.debug(
                "%s has %d worklogs, search embedded %d; fetching all",
                issue.key, worklog["total"], len(embedded),
            )
            all_worklogs = [w.raw for w in self._get_client().worklogs(issue.key)]
            fields["worklog"] = {**worklog, "worklogs": all_worklogs}

        return {
            "id": issue.id,
            "key": issue.key,
            "fields": fields,
        }
