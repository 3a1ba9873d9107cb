from flask import current_app, request
from flask_socketio import emit

from racebingo import socketio
from racebingo.errors import InvalidRequest, InvalidSize, RoomError
from racebingo.gateway import dispatch, get_registry


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def _required_text(data, key) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidRequest(f'{key} is required')
    return value


def _free_text(data, key) -> str:
    # Usernames are free text; only the type is checked
    value = data.get(key)
    if not isinstance(value, str):
        raise InvalidRequest(f'{key} is required')
    return value


def _coerce_size(value) -> int:
    minimum = current_app.config.get('MIN_BOARD_SIZE', 2)
    if isinstance(value, bool):
        raise InvalidSize(minimum)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise InvalidSize(minimum)


def _run(operation, *args) -> None:
    """Call a registry operation and dispatch its outcome.

    The registry lock is held across both steps, so broadcasts go out in
    the order the transitions were applied. RoomError goes back to the
    requesting connection as ``room-error``; nothing else is sent then.
    """
    with get_registry().lock:
        try:
            outcome = operation(*args)
        except RoomError as exc:
            current_app.logger.info(f"[room-error] sid={_get_sid()} op={operation.__name__} error={exc}")
            emit('room-error', str(exc))
            return
        dispatch(outcome)


def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    current_app.logger.debug(f"[disconnect] sid={_get_sid()} reason={reason}")
    _run(get_registry().disconnect, _get_sid())


def handle_create_room(data):
    data = _payload(data)
    try:
        room_id = _required_text(data, 'roomId')
        username = _free_text(data, 'username')
        size = _coerce_size(data.get('size'))
    except RoomError as exc:
        emit('room-error', str(exc))
        return
    _run(get_registry().create_room, _get_sid(), room_id, username, size, data.get('goalList'))


def handle_join_room(data):
    data = _payload(data)
    try:
        room_id = _required_text(data, 'roomId')
        username = _free_text(data, 'username')
    except RoomError as exc:
        emit('room-error', str(exc))
        return
    _run(get_registry().join_room, _get_sid(), room_id, username)


def handle_start_game(data):
    _run(get_registry().start_game, _get_sid(), _payload(data).get('roomId'))


def handle_update_cell(data):
    data = _payload(data)
    _run(get_registry().update_cell, _get_sid(), data.get('roomId'), data.get('row'), data.get('col'))


def handle_chat_message(data):
    data = _payload(data)
    _run(get_registry().chat_message, _get_sid(), data.get('roomId'), data.get('message'))


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create-room', handle_create_room, namespace=namespace)
    socketio.on_event('join-room', handle_join_room, namespace=namespace)
    socketio.on_event('start-game', handle_start_game, namespace=namespace)
    socketio.on_event('update-cell', handle_update_cell, namespace=namespace)
    socketio.on_event('chat-message', handle_chat_message, namespace=namespace)
