import time
from typing import Callable, Dict, List, Optional


DEFAULT_IDLE_TIMEOUT_SEC = 30 * 60


class IdleTimeoutSupervisor:
    """Track one eviction deadline per room.

    Arming a room replaces any previous deadline, so a stale deadline can
    never fire after the room saw activity. Callers must hold the registry
    lock; the supervisor itself never touches rooms.
    """

    def __init__(self, timeout_sec: float = DEFAULT_IDLE_TIMEOUT_SEC, clock: Callable[[], float] = time.monotonic):
        self.timeout_sec = timeout_sec
        self.clock = clock
        self._deadlines: Dict[str, float] = {}

    def arm(self, room_id: str) -> float:
        deadline = self.clock() + self.timeout_sec
        self._deadlines[room_id] = deadline
        return deadline

    def cancel(self, room_id: str) -> None:
        self._deadlines.pop(room_id, None)

    def is_armed(self, room_id: str) -> bool:
        return room_id in self._deadlines

    def deadline(self, room_id: str) -> Optional[float]:
        return self._deadlines.get(room_id)

    def expired(self, now: Optional[float] = None) -> List[str]:
        if now is None:
            now = self.clock()
        return [rid for rid, deadline in self._deadlines.items() if deadline <= now]

    def __len__(self):
        return len(self._deadlines)
