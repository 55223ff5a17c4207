"""
Calculator - browser calculator with a saved history and light/dark theme.
No login required; each browser gets an anonymous client id in its session.
"""

import logging
import uuid

from flask import Blueprint, abort, current_app, jsonify, redirect, render_template, request, session, url_for

from app.projects.calculator.core.constants import KEY_LABELS, KEYPAD_ROWS
from app.projects.calculator.core.controller import CalculatorController
from app.projects.calculator.core.evaluator import CalculationError, evaluate, format_result
from app.projects.calculator.forms import ActionForm, KeyPressForm
from app.projects.calculator.storage import HistoryStore, ThemeStore
from app.utils.logging import log_activity, log_project_visit

logger = logging.getLogger(__name__)

calculator_bp = Blueprint('calculator', __name__,
                          template_folder='templates',
                          static_folder='static',
                          static_url_path='/projects/calculator/static')

CLIENT_KEY = 'calculator_client_id'
BUFFER_KEY = 'calculator_buffer'


# --- Helper Functions ---

def get_client_id():
    """Anonymous per-browser id, created on first use."""
    client_id = session.get(CLIENT_KEY)
    if not client_id:
        client_id = str(uuid.uuid4())
        session[CLIENT_KEY] = client_id
    return client_id


def load_controller():
    """Build the controller for this request from the session and stores."""
    client_id = get_client_id()
    limit = current_app.config.get('CALCULATOR_HISTORY_LIMIT', 200)
    return CalculatorController(
        history_store=HistoryStore(client_id, limit=limit),
        theme_store=ThemeStore(client_id),
        buffer=session.get(BUFFER_KEY, ''),
        history_limit=limit,
    )


def save_buffer(controller):
    session[BUFFER_KEY] = controller.buffer


def time_zone():
    return current_app.config.get('CALCULATOR_TIME_ZONE', 'UTC')


def state_response(controller):
    return jsonify(controller.to_dict(time_zone()))


def restore_or_404(controller, index):
    try:
        controller.restore(index)
    except IndexError:
        abort(404)


# --- Pages ---

@calculator_bp.route('/')
def index():
    """Calculator page: display, keypad and history panel."""
    controller = load_controller()
    log_project_visit('calculator', 'Calculator', get_client_id())
    return render_template('calculator.html',
                           display=controller.buffer,
                           theme=controller.theme,
                           history=controller.history_rows(time_zone()),
                           keypad_rows=KEYPAD_ROWS,
                           key_labels=KEY_LABELS,
                           key_form=KeyPressForm(),
                           action_form=ActionForm())


@calculator_bp.route('/press', methods=['POST'])
def press():
    """Apply one keypad button (no-JS fallback)."""
    form = KeyPressForm()
    if form.validate_on_submit():
        controller = load_controller()
        controller.press(form.key.data)
        save_buffer(controller)
    return redirect(url_for('calculator.index'))


@calculator_bp.route('/history/<int:index>/restore', methods=['POST'])
def restore(index):
    controller = load_controller()
    restore_or_404(controller, index)
    save_buffer(controller)
    return redirect(url_for('calculator.index'))


@calculator_bp.route('/history/clear', methods=['POST'])
def clear_history():
    controller = load_controller()
    controller.clear_history()
    log_activity('calculator', 'Clear History', 'Calculator history cleared', get_client_id())
    return redirect(url_for('calculator.index'))


@calculator_bp.route('/history/sample', methods=['POST'])
def sample_history():
    controller = load_controller()
    controller.add_sample_data()
    return redirect(url_for('calculator.index'))


@calculator_bp.route('/theme', methods=['POST'])
def toggle_theme():
    controller = load_controller()
    controller.toggle_theme()
    return redirect(url_for('calculator.index'))


# --- JSON API ---

@calculator_bp.route('/api/state')
def api_state():
    return state_response(load_controller())


@calculator_bp.route('/api/press', methods=['POST'])
def api_press():
    """Apply one key: {"key": "7"}. Returns the new state."""
    data = request.get_json(silent=True) or {}
    key = data.get('key')
    if not isinstance(key, str) or not key:
        return jsonify({'error': 'key must be a non-empty string'}), 400
    controller = load_controller()
    controller.press(key)
    save_buffer(controller)
    return state_response(controller)


@calculator_bp.route('/api/evaluate', methods=['POST'])
def api_evaluate():
    """Evaluate an expression without touching the display or history."""
    data = request.get_json(silent=True) or {}
    expression = data.get('expression')
    if not isinstance(expression, str) or not expression.strip():
        return jsonify({'error': 'expression must be a non-empty string'}), 400
    try:
        result = evaluate(expression)
    except CalculationError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify({'result': format_result(result)})


@calculator_bp.route('/api/history/<int:index>/restore', methods=['POST'])
def api_restore(index):
    controller = load_controller()
    restore_or_404(controller, index)
    save_buffer(controller)
    return state_response(controller)


@calculator_bp.route('/api/history/clear', methods=['POST'])
def api_clear_history():
    controller = load_controller()
    controller.clear_history()
    log_activity('calculator', 'Clear History', 'Calculator history cleared', get_client_id())
    return state_response(controller)


@calculator_bp.route('/api/theme', methods=['POST'])
def api_toggle_theme():
    controller = load_controller()
    controller.toggle_theme()
    return state_response(controller)
