from enum import Enum


class CellState(str, Enum):
    # Wire values understood by the browser client
    EMPTY = ''
    MARKED = 'X'


class Cell:
    def __init__(self, value):
        self.value = value
        self.state = CellState.EMPTY
        self.owner_id = None
        self.color = None

    @property
    def is_marked(self):
        return self.state == CellState.MARKED

    def is_owned_by(self, player_id):
        return self.is_marked and self.owner_id == player_id

    def claim(self, player):
        self.state = CellState.MARKED
        self.owner_id = player.id
        self.color = player.color

    def clear(self):
        self.state = CellState.EMPTY
        self.owner_id = None
        self.color = None

    def to_dict(self):
        return {
            'value': self.value,
            'state': self.state.value,
            'ownerId': self.owner_id,
            'color': self.color,
        }


class Player:
    def __init__(self, id, username, color, is_creator=False):
        self.id = id
        self.username = username
        self.color = color
        self.score = 0
        self.is_creator = is_creator

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'color': self.color,
            'score': self.score,
            'isCreator': self.is_creator,
        }


class Room:
    def __init__(self, id, size, board, goal_list, creator_id):
        self.id = id
        self.size = size
        self.board = board
        # Kept verbatim so restarts can deal a fresh board
        self.goal_list = list(goal_list)
        self.players = []
        self.game_started = False
        self.winner = None
        self.creator_id = creator_id
        self.start_time = None

    def find_player(self, player_id):
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def remove_player(self, player_id):
        player = self.find_player(player_id)
        if player is not None:
            self.players.remove(player)
        return player

    def colors_in_use(self):
        return {p.color for p in self.players}

    def cell_at(self, row, col):
        """Return the cell at (row, col), or None when out of bounds."""
        if not (0 <= row < self.size and 0 <= col < self.size):
            return None
        return self.board[row][col]

    def iter_cells(self):
        for r, row in enumerate(self.board):
            for c, cell in enumerate(row):
                yield r, c, cell

    def marked_count(self):
        return sum(1 for _, _, cell in self.iter_cells() if cell.is_marked)

    def recompute_scores(self):
        counts = {p.id: 0 for p in self.players}
        for _, _, cell in self.iter_cells():
            if cell.is_marked and cell.owner_id in counts:
                counts[cell.owner_id] += 1
        for player in self.players:
            player.score = counts[player.id]

    def board_dict(self):
        return [[cell.to_dict() for cell in row] for row in self.board]

    def players_dict(self):
        return [p.to_dict() for p in self.players]

    def to_dict(self):
        return {
            'roomId': self.id,
            'board': self.board_dict(),
            'size': self.size,
            'players': self.players_dict(),
            'gameStarted': self.game_started,
        }

    def summary(self):
        return {
            'roomId': self.id,
            'size': self.size,
            'players': len(self.players),
            'gameStarted': self.game_started,
        }
