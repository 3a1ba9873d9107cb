from racebingo import socketio
from racebingo.gateway import dispatch, get_registry


def sweep_idle_rooms(app) -> int:
    """Run one eviction pass and broadcast the resulting timeouts.

    Returns the number of rooms that were closed.
    """
    with app.app_context():
        registry = get_registry(app)
        # Same lock as the socket handlers, so a timeout never interleaves with a mutation
        with registry.lock:
            outcome = registry.expire_idle_rooms()
            if outcome:
                try:
                    app.logger.info(f"[idle-sweep] closed={outcome.closed}")
                except Exception:
                    pass
                dispatch(outcome, app=app)
        return len(outcome.closed)


def start_idle_sweeper(app) -> None:
    """Start the background task that evicts idle rooms.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Wakes every IDLE_SWEEP_INTERVAL_SEC seconds
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return

    interval = int(app.config.get('IDLE_SWEEP_INTERVAL_SEC', 30))

    def _worker():
        app.logger.info(f"[idle-sweeper] started interval={interval}s")
        while True:
            socketio.sleep(interval)
            try:
                sweep_idle_rooms(app)
            except Exception:
                app.logger.exception("[idle-sweeper] sweep failed")

    socketio.start_background_task(_worker)
