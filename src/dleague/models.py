"""Data models for dleague.

Domain model hierarchy:
- A roster holds exactly five Players
- A season is a list of DoublesFixtures (two teams of two plus one sit-out)
- Completed fixtures come back as MatchResults (games won per side)
- Standings fold MatchResults into StandingRows and TeamStandingRows
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MatchSide(str, Enum):
    """Side of a doubles match."""

    TEAM_A = "team_a"
    TEAM_B = "team_b"


class MatchStatus(str, Enum):
    """Match status."""

    SCHEDULED = "scheduled"  # Generated but not yet played
    COMPLETED = "completed"  # Result recorded


# ============================================================================
# Roster and Schedule Models
# ============================================================================


@dataclass(frozen=True)
class Player:
    """Roster entry.

    The id is an opaque token; only equality and ordering are used.
    """

    id: str
    name: str

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name} ({self.id})"


@dataclass(frozen=True)
class DoublesFixture:
    """One generated doubles match.

    Two disjoint teams of two plus the player sitting out. Across the three
    slots the five roster ids appear exactly once each.
    """

    match_number: int  # 1-based within the season
    team_a: tuple[str, str]
    team_b: tuple[str, str]
    sit_out: str

    @property
    def player_ids(self) -> tuple[str, ...]:
        """All five ids in slot order (team A, team B, sit-out)."""
        return (*self.team_a, *self.team_b, self.sit_out)

    def __str__(self) -> str:
        """String representation."""
        return (
            f"Match {self.match_number}: {' & '.join(self.team_a)} vs "
            f"{' & '.join(self.team_b)} (out: {self.sit_out})"
        )


# ============================================================================
# Result Models
# ============================================================================


@dataclass
class MatchResult:
    """A completed match, as fed to the standings engine.

    Doubles sides carry two ids. A side with fewer is tolerated and simply
    contributes nothing for the missing slot.
    """

    team_a_ids: tuple[str, ...]
    team_b_ids: tuple[str, ...]
    team_a_games: int
    team_b_games: int

    def __post_init__(self):
        # Empty slots ("" or None) are dropped
        self.team_a_ids = tuple(pid for pid in self.team_a_ids if pid)
        self.team_b_ids = tuple(pid for pid in self.team_b_ids if pid)

    @property
    def winner_side(self) -> Optional[MatchSide]:
        """Side with strictly more games, None on equal counts."""
        if self.team_a_games > self.team_b_games:
            return MatchSide.TEAM_A
        elif self.team_b_games > self.team_a_games:
            return MatchSide.TEAM_B
        return None

    def __str__(self) -> str:
        """String representation."""
        team_a = " & ".join(self.team_a_ids) or "-"
        team_b = " & ".join(self.team_b_ids) or "-"
        return f"{team_a} {self.team_a_games}-{self.team_b_games} {team_b}"


# ============================================================================
# Standings Models
# ============================================================================


@dataclass
class StandingRow:
    """Standing for a single player.

    Tracks all metrics needed for tie-breaking.
    """

    player_id: str
    player_name: str
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    # League points (per game won plus a bonus per match won)
    points: int = 0
    games_won: int = 0
    games_lost: int = 0
    game_differential: int = 0
    # Final position after applying tie-breaking rules
    position: Optional[int] = None

    def __str__(self) -> str:
        """String representation."""
        pos = f"#{self.position}" if self.position else "unranked"
        return f"{pos} {self.player_name}: {self.points}pts {self.wins}W-{self.losses}L"


@dataclass
class TeamStandingRow:
    """Standing for a partnership (unordered pair of players)."""

    team_key: str  # Canonical "a|b" with ids sorted
    player_ids: tuple[str, str]
    team_name: str
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    points: int = 0
    games_won: int = 0
    games_lost: int = 0
    game_differential: int = 0
    position: Optional[int] = None

    def __str__(self) -> str:
        """String representation."""
        pos = f"#{self.position}" if self.position else "unranked"
        return f"{pos} {self.team_name}: {self.points}pts {self.wins}W-{self.losses}L"


@dataclass
class Standings:
    """Ranked player and team tables."""

    player_rows: list[StandingRow] = field(default_factory=list)
    team_rows: list[TeamStandingRow] = field(default_factory=list)
