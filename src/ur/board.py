"""The Board holds the fixed track geometry: every square and the path each player walks over them."""

from dataclasses import dataclass
from typing import Optional, Self

from src.ur.square import Square

PLAYER_IDS = (0, 1)
SIDE_NAMES: dict[int, str] = {0: "black", 1: "white"}

SHARED_SQUARES_COUNT = 8
# private squares per side: rows 2 and 3 of the side columns do not exist on this board
PRIVATE_ROWS = (0, 1, 4, 5, 6, 7)
PRIVATE_ROSETTA_ROWS = (1, 7)
FORT_ROSETTA_ROW = 4


@dataclass
class Board:
    paths: dict[int, list[Square]]

    @classmethod
    def standard(cls) -> Self:
        """
        The fixed layout
        ----

        Three columns of eight rows. The middle column is shared by both players, the side columns are private.

        Each path:
        * enters at row 4 of its own column and runs down to row 7 (a rosetta)
        * crosses into the shared column and runs back up from row 7 to row 0 (row 4 is the fort rosetta)
        * leaves the shared column into its own rows 0 and 1 (row 1 is a rosetta) and then exits the board.
        """
        shared = {
            row: Square(
                f"shared-{row}",
                is_rosetta=row == FORT_ROSETTA_ROW,
                is_fort=row == FORT_ROSETTA_ROW,
            )
            for row in range(SHARED_SQUARES_COUNT)
        }

        paths: dict[int, list[Square]] = {}
        for player_id in PLAYER_IDS:
            side = SIDE_NAMES[player_id]
            private = {
                row: Square(
                    f"{side}-{row}",
                    is_rosetta=row in PRIVATE_ROSETTA_ROWS,
                    is_safe=True,
                )
                for row in PRIVATE_ROWS
            }
            paths[player_id] = (
                [private[row] for row in (4, 5, 6, 7)]
                + [shared[row] for row in range(SHARED_SQUARES_COUNT - 1, -1, -1)]
                + [private[row] for row in (0, 1)]
            )
        return cls(paths)

    @classmethod
    def from_paths(cls, paths: dict[int, list[Square]]) -> Self:
        """Any other geometry (tests use short tracks)."""
        return cls({player_id: list(path) for player_id, path in paths.items()})

    def path(self, player_id: int) -> list[Square]:
        return self.paths.get(player_id, [])

    def path_length(self, player_id: int) -> int:
        return len(self.path(player_id))

    def square_for(self, player_id: int, index: int) -> Optional[Square]:
        """The square a player reaches at a given index of their own path (None when off the path)."""
        path = self.path(player_id)
        if 0 <= index < len(path):
            return path[index]
        return None

    def square_by_id(self, square_id: str) -> Optional[Square]:
        return next((square for square in self.squares() if square.id == square_id), None)

    def squares(self) -> list[Square]:
        """Every distinct square, in the order the paths first visit them."""
        seen: dict[str, Square] = {}
        for player_id in sorted(self.paths):
            for square in self.paths[player_id]:
                seen.setdefault(square.id, square)
        return list(seen.values())

    def shared_squares(self) -> list[Square]:
        """Squares reachable by more than one player."""
        return [
            square
            for square in self.squares()
            if sum(square in path for path in self.paths.values()) > 1
        ]
