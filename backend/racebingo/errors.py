"""User-facing room errors.

Every error here is reported to the requesting connection as a ``room-error``
event and never leaves partial state behind.
"""


class RoomError(Exception):
    message = 'Room error'

    def __init__(self, message=None):
        super().__init__(message or self.message)


class RoomExists(RoomError):
    message = 'Room already exists'


class RoomNotFound(RoomError):
    message = 'Room does not exist'


class InsufficientGoals(RoomError):
    def __init__(self, required: int):
        self.required = required
        super().__init__(f'Need at least {required} goals in the list')


class InvalidSize(RoomError):
    def __init__(self, minimum: int = 2):
        self.minimum = minimum
        super().__init__(f'Size must be at least {minimum}')


class InvalidGoalList(RoomError):
    message = 'Invalid goal list'


class GameInProgress(RoomError):
    message = 'Game in progress'


class InvalidRequest(RoomError):
    message = 'Invalid request'
