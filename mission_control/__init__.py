"""
Flask application factory.

Creates and configures the console app, wires the lifecycle controller and
registers the console blueprint.
"""
import os
from datetime import datetime, timezone
from flask import Flask


def _time_since(value):
    """Jinja2 filter: convert a timestamp to '2m ago' style string."""
    if not value:
        return ''
    try:
        if isinstance(value, str):
            dt = datetime.fromisoformat(value.replace('Z', '+00:00'))
        else:
            dt = value
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        diff = (datetime.now(timezone.utc) - dt).total_seconds()
        if diff < 60:
            return 'just now'
        if diff < 3600:
            return f'{int(diff // 60)}m ago'
        if diff < 86400:
            return f'{int(diff // 3600)}h ago'
        return f'{int(diff // 86400)}d ago'
    except (TypeError, ValueError):
        return ''


def _short_date(value):
    """Jinja2 filter: 'Mar 4, 2026' for a datetime (or ISO string)."""
    if not value:
        return ''
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return value
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def create_app(store=None, collector=None):
    """
    Create and configure the Flask application.

    store / collector override the configured clients (tests, local preview).
    """
    from mission_control.config import SECRET_KEY
    from mission_control.extensions import init_console
    from mission_control.logging_config import configure_logging

    root = os.path.dirname(os.path.dirname(__file__))
    app = Flask(
        __name__,
        template_folder=os.path.join(root, 'templates'),
        static_folder=os.path.join(root, 'static'),
    )

    configure_logging(app)

    app.secret_key = SECRET_KEY

    app.jinja_env.filters['time_since'] = _time_since
    app.jinja_env.filters['short_date'] = _short_date

    init_console(app, store=store, collector=collector)

    from mission_control.routes.console import bp as console_bp
    app.register_blueprint(console_bp)

    return app
