from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)

def _origins(value):
    if not value or value == '*':
        return '*'
    return [o.strip() for o in value.split(',') if o.strip()]

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    from racebingo.log import setup_logging
    setup_logging(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = _origins(flask_app.config.get('CORS_ORIGINS', '*'))
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One registry per app; handlers reach it through app.extensions
    from racebingo.gateway import REGISTRY_KEY
    from racebingo.services.bingo import IdleTimeoutSupervisor, RoomRegistry
    supervisor = IdleTimeoutSupervisor(timeout_sec=flask_app.config.get('ROOM_IDLE_TIMEOUT_SEC', 1800))
    flask_app.extensions[REGISTRY_KEY] = RoomRegistry(
        supervisor=supervisor,
        min_size=flask_app.config.get('MIN_BOARD_SIZE', 2),
    )

    from racebingo.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers on the configured namespace
    from racebingo.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    from racebingo.services.bingo.scheduler import start_idle_sweeper
    start_idle_sweeper(flask_app)

    @click.command('validate-goals')
    @click.argument('goal_file', type=click.File('r'))
    @click.option('--size', type=int, default=None, help='Board size the list must fill.')
    def validate_goals_command(goal_file, size):
        """Check a goal-list JSON file and report the boards it supports."""
        from racebingo.errors import RoomError
        from racebingo.services.bingo.goals import load_goal_list, max_board_size, require_goal_count
        try:
            goals = load_goal_list(goal_file.read())
            if size is not None:
                require_goal_count(goals, size)
        except RoomError as exc:
            raise click.ClickException(str(exc))
        largest = max_board_size(goals)
        click.echo(f'{len(goals)} goals, largest board {largest}x{largest}')

    flask_app.cli.add_command(validate_goals_command)

    return flask_app
