"""
Console routes — triage page, JSON API, HTMX partials, health check.

Routes hold no state of their own: every intent goes through the
LifecycleController and every response renders its LeadViewState.
"""
import logging
from flask import Blueprint, jsonify, render_template, request

from mission_control.config import FILTER_OPTIONS
from mission_control.errors import (
    ConsoleError, StoreUnavailable, TriggerUnavailable, CollectionInProgress,
    UnknownPlatform, LeadNotFound, InvalidTransition,
)
from mission_control.extensions import get_controller

logger = logging.getLogger('routes.console')

bp = Blueprint('console', __name__)

ERROR_STATUS = {
    StoreUnavailable: 503,
    TriggerUnavailable: 502,
    CollectionInProgress: 409,
    UnknownPlatform: 400,
    LeadNotFound: 404,
    InvalidTransition: 409,
}


def _error_response(error: ConsoleError):
    status = ERROR_STATUS.get(type(error), 500)
    return jsonify({'error': type(error).__name__, 'message': str(error)}), status


def _ensure_loaded(controller):
    """First page view performs the initial fetch."""
    if not controller.state.loaded:
        try:
            controller.refresh()
        except StoreUnavailable:
            pass  # recorded as a notice


def _render_list(controller):
    state = controller.state
    return render_template(
        'partials/lead_list.html',
        leads=state.filtered(),
        state=state,
        counts=state.counts(),
        filter_options=FILTER_OPTIONS,
        platforms=controller.platforms,
        busy=controller.busy,
        notices=state.drain_notices(),
    )


# ── Page ─────────────────────────────────────────────────────────────────────

@bp.route('/')
def index():
    """Lead triage console."""
    controller = get_controller()
    _ensure_loaded(controller)
    state = controller.state
    return render_template(
        'console.html',
        leads=state.filtered(),
        state=state,
        counts=state.counts(),
        filter_options=FILTER_OPTIONS,
        platforms=controller.platforms,
        busy=controller.busy,
        notices=state.drain_notices(),
    )


@bp.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy"}), 200


# ── JSON API ─────────────────────────────────────────────────────────────────

@bp.route('/api/leads')
def list_leads():
    """Leads matching ?status= (default: the active filter)."""
    controller = get_controller()
    selector = request.args.get('status')
    try:
        leads = controller.filter(selector)
    except ValueError as e:
        return jsonify({'error': 'InvalidFilter', 'message': str(e)}), 400
    return jsonify({
        'filter': selector or controller.state.active_filter,
        'loaded': controller.state.loaded,
        'loading': controller.state.loading,
        'collecting': controller.state.collecting,
        'leads': [lead.to_dict() for lead in leads],
    })


@bp.route('/api/leads/refresh', methods=['POST'])
def refresh_leads():
    controller = get_controller()
    try:
        leads = controller.refresh()
    except ConsoleError as e:
        return _error_response(e)
    return jsonify({'count': len(leads)})


@bp.route('/api/collect/<platform>', methods=['POST'])
def collect(platform):
    """Run the collection job for platform (blocks until the job answers)."""
    controller = get_controller()
    try:
        result = controller.run_collection(platform)
    except ConsoleError as e:
        return _error_response(e)
    return jsonify({
        'platform': result.platform,
        'leads_saved': result.leads_saved,
        'count': len(controller.state.leads),
    })


@bp.route('/api/leads/<lead_id>/status', methods=['POST'])
def change_status(lead_id):
    data = request.get_json(silent=True) or {}
    new_status = data.get('status', '')
    if not new_status:
        return jsonify({'error': 'InvalidRequest', 'message': 'status is required'}), 400

    controller = get_controller()
    try:
        lead = controller.change_status(lead_id, new_status)
    except ConsoleError as e:
        return _error_response(e)
    return jsonify(lead.to_dict())


@bp.route('/api/notices')
def notices():
    """Pending operator notices (drained on read)."""
    return jsonify([n.to_dict() for n in get_controller().state.drain_notices()])


# ── HTMX partials ────────────────────────────────────────────────────────────

@bp.route('/partials/leads')
def leads_partial():
    """HTMX: switch the active filter and re-render the list."""
    controller = get_controller()
    selector = request.args.get('status')
    if selector:
        try:
            controller.set_filter(selector)
        except ValueError:
            return f'Unknown filter: {selector}', 400
    return _render_list(controller)


@bp.route('/partials/leads/<lead_id>/<action>', methods=['POST'])
def lead_action_partial(lead_id, action):
    """HTMX: approve / reject / mark-sent, then re-render the list."""
    controller = get_controller()
    try:
        controller.apply_action(lead_id, action)
    except ConsoleError as e:
        logger.info("Action %s on %s not applied: %s", action, lead_id, e)
    return _render_list(controller)


@bp.route('/partials/refresh', methods=['POST'])
def refresh_partial():
    controller = get_controller()
    try:
        controller.refresh()
    except ConsoleError:
        pass  # recorded as a notice
    return _render_list(controller)


@bp.route('/partials/collect/<platform>', methods=['POST'])
def collect_partial(platform):
    """HTMX: run collection, then re-render the list with its notices."""
    controller = get_controller()
    try:
        controller.run_collection(platform)
    except ConsoleError as e:
        logger.info("Collection for %s not completed: %s", platform, e)
    return _render_list(controller)


@bp.route('/partials/notices')
def notices_partial():
    """HTMX: render and drain pending notices."""
    return render_template('partials/notices.html', notices=get_controller().state.drain_notices())
