import logging
import random
import threading
import time
from collections import namedtuple
from typing import Dict, Optional

from racebingo.errors import (
    GameInProgress,
    InvalidSize,
    RoomExists,
    RoomNotFound,
)
from racebingo.models import Player, Room
from .board import MIN_BOARD_SIZE, generate_board
from .colors import next_color
from .goals import require_goal_count, validate_goal_list
from .idle import IdleTimeoutSupervisor


logger = logging.getLogger(__name__)

ROOM_TIMEOUT_MESSAGE = 'Room closed due to inactivity'

# ``to`` is either a room id or a single connection id
Outbound = namedtuple('Outbound', ['event', 'payload', 'to'])


class Outcome:
    """Everything one registry operation wants the transport to do, in order."""

    def __init__(self):
        self.events = []
        self.entered = []  # (sid, room_id) pairs to add to a broadcast group
        self.closed = []   # room ids whose broadcast group goes away

    def emit(self, event, payload, to):
        self.events.append(Outbound(event, payload, to))

    def enter(self, sid, room_id):
        self.entered.append((sid, room_id))

    def close(self, room_id):
        self.closed.append(room_id)

    def names(self):
        return [e.event for e in self.events]

    def __bool__(self):
        return bool(self.events or self.entered or self.closed)


class RoomRegistry:
    """Owns every room and serialises all transitions on them.

    Each operation takes the requesting connection id explicitly, checks
    everything before touching state, and returns an Outcome. Payloads in
    the Outcome are snapshots taken under the lock.
    """

    def __init__(self, supervisor: Optional[IdleTimeoutSupervisor] = None, rng=None,
                 clock=time.time, min_size: int = MIN_BOARD_SIZE):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.RLock()
        self.supervisor = supervisor if supervisor is not None else IdleTimeoutSupervisor()
        self.rng = rng or random.Random()
        self.clock = clock
        self.min_size = min_size

    @property
    def lock(self):
        """Re-entrant lock serialising transitions.

        Hold it across an operation and the dispatch of its Outcome so
        broadcasts leave in the same order the mutations happened.
        """
        return self._lock

    def _lookup(self, room_id) -> Optional[Room]:
        # Client payloads may carry any JSON value as roomId
        if not isinstance(room_id, str):
            return None
        return self._rooms.get(room_id)

    # ---- read side ----

    def get(self, room_id: str) -> Optional[Room]:
        with self._lock:
            return self._lookup(room_id)

    def __contains__(self, room_id):
        with self._lock:
            return self._lookup(room_id) is not None

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def summaries(self):
        with self._lock:
            return [room.summary() for room in self._rooms.values()]

    def player_count(self) -> int:
        with self._lock:
            return sum(len(room.players) for room in self._rooms.values())

    # ---- transitions ----

    def create_room(self, sid, room_id, username, size, goal_list) -> Outcome:
        with self._lock:
            if room_id in self._rooms:
                raise RoomExists()
            if isinstance(size, bool) or not isinstance(size, int) or size < self.min_size:
                raise InvalidSize(self.min_size)
            validate_goal_list(goal_list)
            require_goal_count(goal_list, size)

            board = generate_board(size, goal_list, rng=self.rng, min_size=self.min_size)
            room = Room(room_id, size, board, goal_list, creator_id=sid)
            room.players.append(Player(sid, username, next_color((), rng=self.rng), is_creator=True))
            self._rooms[room_id] = room
            self.supervisor.arm(room_id)

            outcome = Outcome()
            outcome.enter(sid, room_id)
            outcome.emit('room-created', {
                'roomId': room_id,
                'board': room.board_dict(),
                'size': size,
                'players': room.players_dict(),
            }, to=sid)
            logger.info(f"[room-create] room={room_id} sid={sid} size={size} goals={len(goal_list)}")
            return outcome

    def join_room(self, sid, room_id, username) -> Outcome:
        with self._lock:
            room = self._lookup(room_id)
            if room is None:
                raise RoomNotFound()
            if room.game_started:
                raise GameInProgress()

            outcome = Outcome()
            if room.find_player(sid) is None:
                color = next_color(room.colors_in_use(), rng=self.rng)
                room.players.append(Player(sid, username, color))
                outcome.enter(sid, room_id)
                outcome.emit('player-joined', room.players_dict(), to=room_id)
                logger.info(f"[room-join] room={room_id} sid={sid} players={len(room.players)}")
            self.supervisor.arm(room_id)
            outcome.emit('init', room.to_dict(), to=sid)
            return outcome

    def start_game(self, sid, room_id) -> Outcome:
        outcome = Outcome()
        with self._lock:
            room = self._lookup(room_id)
            if room is None or room.creator_id != sid:
                return outcome

            room.board = generate_board(room.size, room.goal_list, rng=self.rng, min_size=self.min_size)
            room.game_started = True
            room.winner = None
            room.start_time = int(self.clock() * 1000)
            room.recompute_scores()

            outcome.emit('game-start', {
                'board': room.board_dict(),
                'size': room.size,
                'startTime': room.start_time,
            }, to=room_id)
            logger.info(f"[game-start] room={room_id} start_time={room.start_time}")
            return outcome

    def update_cell(self, sid, room_id, row, col) -> Outcome:
        outcome = Outcome()
        with self._lock:
            room = self._lookup(room_id)
            if room is None or not room.game_started:
                return outcome
            player = room.find_player(sid)
            if player is None:
                return outcome
            if not _is_index(row) or not _is_index(col):
                return outcome
            cell = room.cell_at(row, col)
            if cell is None:
                return outcome

            if cell.is_owned_by(sid):
                cell.clear()
            elif not cell.is_marked:
                cell.claim(player)
            else:
                # First claimant keeps the cell
                return outcome

            outcome.emit('cell-updated', {
                'row': row,
                'col': col,
                'state': cell.state.value,
                'color': cell.color,
                'userId': cell.owner_id,
            }, to=room_id)
            room.recompute_scores()
            outcome.emit('scores-updated', {'players': room.players_dict()}, to=room_id)
            self.supervisor.arm(room_id)
            return outcome

    def chat_message(self, sid, room_id, message) -> Outcome:
        outcome = Outcome()
        with self._lock:
            room = self._lookup(room_id)
            sender = room.find_player(sid) if room is not None else None
            if sender is None or not isinstance(message, str):
                return outcome
            outcome.emit('chat-message', {
                'username': sender.username,
                'message': message,
                'color': sender.color,
            }, to=room_id)
            return outcome

    def disconnect(self, sid) -> Outcome:
        outcome = Outcome()
        with self._lock:
            for room_id, room in list(self._rooms.items()):
                if room.remove_player(sid) is None:
                    continue
                logger.info(f"[room-leave] room={room_id} sid={sid} remaining={len(room.players)}")

                if not room.players:
                    self._delete(room_id, outcome)
                    continue

                released = False
                for r, c, cell in room.iter_cells():
                    if cell.is_owned_by(sid):
                        cell.clear()
                        released = True
                        outcome.emit('cell-updated', {
                            'row': r,
                            'col': c,
                            'state': cell.state.value,
                            'color': None,
                            'userId': None,
                        }, to=room_id)
                if released:
                    room.recompute_scores()
                    outcome.emit('scores-updated', {'players': room.players_dict()}, to=room_id)
                outcome.emit('player-left', room.players_dict(), to=room_id)
        return outcome

    def expire_idle_rooms(self, now=None) -> Outcome:
        outcome = Outcome()
        with self._lock:
            for room_id in self.supervisor.expired(now):
                if room_id not in self._rooms:
                    self.supervisor.cancel(room_id)
                    continue
                outcome.emit('room-timeout', ROOM_TIMEOUT_MESSAGE, to=room_id)
                self._delete(room_id, outcome)
                logger.info(f"[room-timeout] room={room_id}")
        return outcome

    def _delete(self, room_id, outcome):
        self.supervisor.cancel(room_id)
        self._rooms.pop(room_id, None)
        outcome.close(room_id)
        logger.info(f"[room-delete] room={room_id} rooms={len(self._rooms)}")


def _is_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
