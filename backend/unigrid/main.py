from flask import Blueprint, jsonify
from unigrid import get_grid_server

main = Blueprint('main', __name__)


@main.route('/health')
def health():
    return jsonify({'ok': True})


@main.route('/api/grid')
def grid_state():
    """Current grid, full history, online count and cooldown configuration."""
    return jsonify(get_grid_server().state())
