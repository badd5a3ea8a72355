"""Four tetrahedral dice: a face of 3 or 4 counts as a success, so a roll yields 0-4 steps."""

import random
from dataclasses import dataclass
from typing import Self

DICE_COUNT = 4
DIE_FACES = 4
SUCCESS_THRESHOLD = 3


@dataclass(frozen=True)
class DiceRoll:
    rolls: tuple[int, ...]
    successes: int

    @classmethod
    def from_rolls(cls, rolls: list[int] | tuple[int, ...]) -> Self:
        return cls(tuple(rolls), sum(1 for value in rolls if value >= SUCCESS_THRESHOLD))


class Dice:
    """Pass a seeded `random.Random` for reproducible games."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def roll_die(self) -> int:
        return self.rng.randint(1, DIE_FACES)

    def roll(self) -> DiceRoll:
        return DiceRoll.from_rolls([self.roll_die() for _ in range(DICE_COUNT)])
