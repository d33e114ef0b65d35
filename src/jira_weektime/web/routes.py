"""HTTP route handlers for the JIRA Weektime web interface."""

from collections.abc import Mapping
from datetime import date

from flask import Blueprint, jsonify, request

from jira_weektime.config import config_exists
from jira_weektime.exceptions import (
    ConfigNotFoundError,
    InvalidConfigError,
    IssueFetchError,
    JiraAuthError,
    JiraConnectionError,
    JiraRateLimitError,
    WeektimeError,
)
from jira_weektime.worktime import fetch_weekly_summary, log_work, summary_to_dict

bp = Blueprint("main", __name__)


def _error(e: Exception, status: int):
    return jsonify({"error": str(e)}), status


def _invalid(message: str):
    return jsonify({"success": False, "message": message}), 400


def _form_fields(data: Mapping, names: tuple[str, ...]) -> dict[str, str] | None:
    """Return the stripped string values of ``names``, or None if any is not a string."""
    fields: dict[str, str] = {}
    for name in names:
        value = data.get(name)
        if value is None:
            value = ""
        if not isinstance(value, str):
            return None
        fields[name] = value.strip()
    return fields


@bp.route("/health")
def health():
    """Health check endpoint."""
    if config_exists():
        return jsonify({"status": "ok", "config_loaded": True})
    return jsonify({
        "status": "error",
        "config_loaded": False,
        "message": "Configuration not found",
    }), 503


@bp.route("/api/week")
def week_summary():
    """Return time logged this week on assigned, incomplete issues."""
    try:
        summary = fetch_weekly_summary()
    except (ConfigNotFoundError, InvalidConfigError, JiraConnectionError) as e:
        return _error(e, 503)
    except JiraAuthError as e:
        return _error(e, 401)
    except JiraRateLimitError as e:
        return _error(e, 429)
    except IssueFetchError as e:
        return _error(e, 502)
    except WeektimeError as e:
        return _error(e, 500)

    return jsonify(summary_to_dict(summary))


@bp.route("/api/worklog", methods=["POST"])
def worklog_post():
    """Log work against an issue."""
    data = request.get_json(silent=True) or request.form
    if not isinstance(data, Mapping):
        return _invalid("Request body must be a JSON object or form data.")

    fields = _form_fields(data, ("issue", "time", "started", "comment"))
    if fields is None:
        return _invalid("Issue, time, started and comment must be text.")
    issue_key = fields["issue"]
    time_spent = fields["time"]
    started_str = fields["started"]
    comment = fields["comment"] or None

    if not issue_key:
        return _invalid("Issue is required.")
    if not time_spent:
        return _invalid("Time spent is required.")

    started = None
    if started_str:
        try:
            started = date.fromisoformat(started_str)
        except ValueError:
            return _invalid(f"Invalid start date supplied: {started_str}")

    try:
        outcome = log_work(issue_key, time_spent, started=started, comment=comment)
    except (ConfigNotFoundError, InvalidConfigError, JiraConnectionError) as e:
        return _error(e, 503)
    except JiraAuthError as e:
        return _error(e, 401)
    except WeektimeError as e:
        return _error(e, 500)

    body = {"success": outcome.success, "message": outcome.message}
    if outcome.success:
        return jsonify(body), 201
    if outcome.failure == "invalid_duration":
        return jsonify(body), 400
    return jsonify(body), 502
