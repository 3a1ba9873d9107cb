from flask import Blueprint, jsonify

from racebingo.gateway import get_registry
from racebingo.services.bingo.goals import DEFAULT_GOALS

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Race Bingo server!'})

@main.route('/health')
def health():
    registry = get_registry()
    return jsonify({
        'status': 'healthy',
        'rooms': len(registry),
        'players': registry.player_count(),
    })

@main.route('/api/rooms')
def list_rooms():
    return jsonify(get_registry().summaries())

@main.route('/api/goals/default')
def default_goals():
    # Same shape the browser client accepts in its goal editor
    return jsonify({'goals': [{'name': name} for name in DEFAULT_GOALS]})
