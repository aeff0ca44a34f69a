"""
Per-app console wiring — store, collector and controller instances.

One LifecycleController (and so one LeadViewState) per Flask app: a single
console session per process. Built at create_app() time; importing this
module never touches the network.
"""
import logging

from flask import current_app

from mission_control.config import COLLECTOR_PLATFORMS
from mission_control.console.controller import LifecycleController
from mission_control.services.collector import build_collector
from mission_control.services.notifications import notify_collection_complete
from mission_control.services.store import build_store

logger = logging.getLogger('mission_control.extensions')

EXTENSION_KEY = 'lead_console'


def init_console(app, store=None, collector=None):
    """Attach a LifecycleController to app. Missing clients are built from config."""
    store = store if store is not None else build_store()
    collector = collector if collector is not None else build_collector()
    controller = LifecycleController(
        store,
        collector,
        platforms=COLLECTOR_PLATFORMS,
        on_collected=notify_collection_complete,
    )
    app.extensions[EXTENSION_KEY] = controller
    logger.info("Console initialized (store=%s, platforms=%s)",
                getattr(store, 'name', type(store).__name__), ', '.join(controller.platforms))
    return controller


def get_controller() -> LifecycleController:
    return current_app.extensions[EXTENSION_KEY]
