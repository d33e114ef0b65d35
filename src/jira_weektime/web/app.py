"""Flask application factory for the JIRA Weektime web interface."""

from flask import Flask


def create_app() -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)

    app.config["SECRET_KEY"] = "jira-weektime-local-dev"

    from jira_weektime.web.routes import bp
    app.register_blueprint(bp)

    return app
