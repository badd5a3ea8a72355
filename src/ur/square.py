"""
A square on the track

(placed in its own module as multiple other modules need to import it)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Square:
    """
    Squares are compared by identity (their `id`), never by the index a path uses to reach them.
    The flags are independent: the central shared square is both a rosetta and a fort.
    """

    id: str
    is_rosetta: bool = False
    is_fort: bool = False
    is_safe: bool = False

    @property
    def is_protected(self) -> bool:
        """An opponent sitting here cannot be captured."""
        return self.is_safe or self.is_fort
