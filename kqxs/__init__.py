"""KQXS ingestion and statistics engine (Flask application package)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Optional config values applied after the environment config
            (used by tests to point the history store at a temp location).

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from kqxs.config import get_config
    from kqxs.error_handlers import register_error_handlers
    from kqxs.extensions import init_ingestion
    from kqxs.logging_config import configure_logging
    from kqxs.routes.context import context_bp
    from kqxs.routes.health import health_bp
    from kqxs.routes.history import history_bp
    from kqxs.routes.stats import stats_bp

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_ingestion(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(history_bp)
    app.register_blueprint(stats_bp)
    app.register_blueprint(context_bp)

    return app
