import json
from typing import Any, List, Sequence

from racebingo.errors import InsufficientGoals, InvalidGoalList


DEFAULT_GOALS = [
    "Go through a Portal",
    "Find an egg",
    "Win the game",
    "Kill a zombie",
    "Get an Upgrade",
    "Complete the Tutorial",
    "Craft something",
    "Level Up",
    "Get a pet",
    "Score a goal",
    "Defeat a Boss",
    "Build a house",
    "Cast a Spell",
    "Drink a Potion",
    "Find a Frog",
    "Do a Backflip",
    "Build A Turret",
    "Play an Instrument",
    "Steal some Treasure",
    "See a Ghost",
    "Use a Shovel",
    "Build a Campfire",
    "Sleep through the night",
    "Ride a boat",
    "Open a Treasure chest",
]


def validate_goal_list(goals: Any) -> None:
    """Raise InvalidGoalList unless goals is a sequence of distinct, non-empty labels."""
    if not isinstance(goals, (list, tuple)):
        raise InvalidGoalList('Goal list must be an array')
    for goal in goals:
        if not isinstance(goal, str) or not goal.strip():
            raise InvalidGoalList('Each goal must be a non-empty string')
    if len(set(goals)) != len(goals):
        raise InvalidGoalList('Goal names must be unique')


def require_goal_count(goals: Sequence[str], size: int) -> None:
    required = size * size
    if len(goals) < required:
        raise InsufficientGoals(required)


def goal_names(raw: Any) -> List[str]:
    """Flatten the goal-file format into plain labels.

    Accepts either ``[{"name": "..."}, ...]`` as written by the browser
    client, or a plain list of strings.
    """
    if not isinstance(raw, list):
        raise InvalidGoalList('Goal list must be an array')
    names = []
    for item in raw:
        if isinstance(item, dict):
            name = item.get('name')
            if not isinstance(name, str) or not name.strip():
                raise InvalidGoalList('Each goal must be an object with a non-empty name property')
            names.append(name)
        elif isinstance(item, str):
            names.append(item)
        else:
            raise InvalidGoalList('Each goal must be an object with a non-empty name property')
    return names


def load_goal_list(text: str) -> List[str]:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidGoalList(f'Goal list is not valid JSON: {exc.msg}') from exc
    names = goal_names(raw)
    validate_goal_list(names)
    return names


def max_board_size(goals: Sequence[str]) -> int:
    """Largest square dimension the goal list can fill."""
    size = 0
    while (size + 1) * (size + 1) <= len(goals):
        size += 1
    return size
