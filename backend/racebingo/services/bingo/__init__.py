"""Bingo domain services: goals, boards, colors, rooms and idle timers.

This package holds the room state machine and its helpers. Socket handlers
and HTTP routes import from here, keeping transport concerns separated from
core game mechanics.
"""

from .idle import IdleTimeoutSupervisor
from .registry import Outcome, Outbound, RoomRegistry

__all__ = ['IdleTimeoutSupervisor', 'Outcome', 'Outbound', 'RoomRegistry']
