"""
Missionaries & Cannibals Module - River crossing with a small boat.

Everyone starts on the near shore. The boat carries between one person and
its capacity. Cannibals may never outnumber missionaries on a shore where
missionaries are present.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..search import SearchState, Transition
from .registry import PuzzleId, register_puzzle


@dataclass(frozen=True)
class BoatMove:
    """
    People carried by one crossing.

    Attributes:
        missionaries: Missionaries in the boat
        cannibals: Cannibals in the boat
    """
    missionaries: int
    cannibals: int

    @property
    def passengers(self) -> int:
        return self.missionaries + self.cannibals

    def describe(self) -> str:
        parts = []
        if self.missionaries:
            parts.append(f"{self.missionaries} missionar{'y' if self.missionaries == 1 else 'ies'}")
        if self.cannibals:
            parts.append(f"{self.cannibals} cannibal{'' if self.cannibals == 1 else 's'}")
        return ", ".join(parts)


def boat_loads(capacity: int) -> List[BoatMove]:
    """Every non-empty boat load up to capacity, in a fixed order."""
    return [
        BoatMove(m, c)
        for m in range(capacity, -1, -1)
        for c in range(capacity - m, -1, -1)
        if m + c > 0
    ]


def _shore_is_safe(missionaries: int, cannibals: int) -> bool:
    return missionaries == 0 or cannibals <= missionaries


def min_crossings(people: int, capacity: int, boat_near: bool) -> int:
    """
    Lower bound on crossings needed to move people off the near shore.

    Each forward trip carries at most capacity people and each return trip
    brings at least one back, so k forward trips clear at most
    k * (capacity - 1) + 1 people.
    """
    if people == 0:
        return 0
    if not boat_near:
        # Someone has to row back first.
        return 1 + min_crossings(people + 1, capacity, True)
    forward = max(1, -(-(people - 1) // (capacity - 1)))
    return 2 * forward - 1


@register_puzzle
@dataclass(frozen=True)
class MissionariesCannibalsState(SearchState):
    """
    People on the near shore and the boat's side.

    Attributes:
        near_missionaries: Missionaries still on the near shore
        near_cannibals: Cannibals still on the near shore
        boat_near: True while the boat is on the near shore
        total_missionaries: Missionaries in the whole puzzle
        total_cannibals: Cannibals in the whole puzzle
        capacity: Maximum people per crossing
    """
    near_missionaries: int = 3
    near_cannibals: int = 3
    boat_near: bool = True
    total_missionaries: int = 3
    total_cannibals: int = 3
    capacity: int = 2

    puzzle_id = PuzzleId.MISSIONARIES_CANNIBALS
    name = "Missionaries & Cannibals"
    summary = "Get 3 missionaries and 3 cannibals across the river safely using A* search."

    def __post_init__(self):
        if self.capacity < 2:
            raise ValueError(f"Boat capacity must be at least 2, got {self.capacity}")
        if not 0 <= self.near_missionaries <= self.total_missionaries:
            raise ValueError(f"Near missionaries out of range: {self.near_missionaries}")
        if not 0 <= self.near_cannibals <= self.total_cannibals:
            raise ValueError(f"Near cannibals out of range: {self.near_cannibals}")

    @classmethod
    def initial(cls) -> "MissionariesCannibalsState":
        return cls()

    @classmethod
    def random_start(cls, rng: Optional[random.Random] = None) -> "MissionariesCannibalsState":
        """Pick a random safe, unsolved configuration of the classic 3/3 puzzle."""
        rng = rng or random.Random()
        candidates = [
            cls(near_missionaries=m, near_cannibals=c, boat_near=boat)
            for m in range(4)
            for c in range(4)
            for boat in (True, False)
        ]
        candidates = [
            s for s in candidates
            if s.is_valid() and not s.is_goal() and s.valid_moves()
        ]
        return rng.choice(candidates)

    @property
    def far_missionaries(self) -> int:
        return self.total_missionaries - self.near_missionaries

    @property
    def far_cannibals(self) -> int:
        return self.total_cannibals - self.near_cannibals

    @property
    def near_people(self) -> int:
        return self.near_missionaries + self.near_cannibals

    def is_valid(self) -> bool:
        """True when neither shore has missionaries outnumbered."""
        return (_shore_is_safe(self.near_missionaries, self.near_cannibals)
                and _shore_is_safe(self.far_missionaries, self.far_cannibals))

    def apply_move(self, move: BoatMove) -> Optional["MissionariesCannibalsState"]:
        """
        Cross the river with a boat load.

        Returns:
            The new state, or None if the load is impossible or unsafe
        """
        if not 1 <= move.passengers <= self.capacity:
            return None
        if self.boat_near:
            if move.missionaries > self.near_missionaries or move.cannibals > self.near_cannibals:
                return None
            sign = -1
        else:
            if move.missionaries > self.far_missionaries or move.cannibals > self.far_cannibals:
                return None
            sign = 1
        new_state = MissionariesCannibalsState(
            near_missionaries=self.near_missionaries + sign * move.missionaries,
            near_cannibals=self.near_cannibals + sign * move.cannibals,
            boat_near=not self.boat_near,
            total_missionaries=self.total_missionaries,
            total_cannibals=self.total_cannibals,
            capacity=self.capacity,
        )
        return new_state if new_state.is_valid() else None

    def valid_moves(self) -> List[BoatMove]:
        return [mv for mv in boat_loads(self.capacity) if self.apply_move(mv) is not None]

    def is_goal(self) -> bool:
        return self.near_people == 0 and not self.boat_near

    def heuristic(self) -> int:
        return min_crossings(self.near_people, self.capacity, self.boat_near)

    def key(self) -> Tuple[int, int, bool]:
        return (self.near_missionaries, self.near_cannibals, self.boat_near)

    def successors(self) -> List[Transition]:
        destination = "far shore" if self.boat_near else "near shore"
        transitions = []
        for move in boat_loads(self.capacity):
            child = self.apply_move(move)
            if child is not None:
                transitions.append(
                    Transition(self, f"cross to {destination}: {move.describe()}", child)
                )
        return transitions

    def render(self) -> str:
        boat = "[boat]" if self.boat_near else "      "
        far_boat = "      " if self.boat_near else "[boat]"
        return (
            f"Near: M={self.near_missionaries} C={self.near_cannibals} {boat} ~~~ "
            f"{far_boat} Far: M={self.far_missionaries} C={self.far_cannibals}"
        )
