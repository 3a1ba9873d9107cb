"""Turn registry outcomes into Socket.IO traffic."""

from flask import current_app
from flask_socketio import close_room, join_room

from racebingo import socketio

REGISTRY_KEY = 'room_registry'


def get_registry(app=None):
    app = app or current_app
    return app.extensions[REGISTRY_KEY]


def dispatch(outcome, app=None) -> None:
    """Apply an Outcome: enter broadcast groups, emit events, then close groups.

    Works inside a socket handler or from a background task, as long as an
    application context is active.
    """
    app = app or current_app
    namespace = app.config.get('SOCKETIO_NAMESPACE', '/')

    for sid, room_id in outcome.entered:
        join_room(room_id, sid=sid, namespace=namespace)

    for event in outcome.events:
        socketio.emit(event.event, event.payload, to=event.to, namespace=namespace)

    for room_id in outcome.closed:
        close_room(room_id, namespace=namespace)
