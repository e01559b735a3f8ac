"""Scoring and standings for tournaments.

Rank points are a fixed lookup (1st 7, 2nd 4, 3rd 3, 4th 1, 5th 0).
Standings add every recorded rank across all rounds to each participant's
bonus adjustment and sort the roster by that total.
"""

# Table Swiss
# Copyright (C) 2025  Table Swiss developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from tableswiss.constants import RANK_POINTS, UNRANKED_POINTS
from tableswiss.models.participant import Participant
from tableswiss.models.tournament.round_data import RoundData
from tableswiss.type_hints import ParticipantId
from tableswiss.utils import setup_logger

logger = setup_logger(__name__)


def points_for_rank(rank: Optional[int]) -> int:
    """Points earned for finishing rank at a table.

    Works the same for every table size; unknown or missing ranks are
    worth nothing.
    """
    if rank is None or isinstance(rank, bool):
        return UNRANKED_POINTS
    return RANK_POINTS.get(rank, UNRANKED_POINTS)


@dataclass
class StandingsEntry:
    """One line of the standings table.

    Attributes
    ----------
    position : int
        1-based place in the standings.
    participant : Participant
        The participant this line is for.
    base_points : int
        Points from recorded table ranks.
    bonus_points : int
        Manual adjustment at the time of calculation.
    rounds_played : int
        Rounds in which the participant has a recorded rank.
    """

    position: int
    participant: Participant
    base_points: int
    bonus_points: int
    rounds_played: int

    @property
    def total_score(self) -> int:
        return self.base_points + self.bonus_points

    @property
    def participant_id(self) -> ParticipantId:
        return self.participant.id

    @property
    def name(self) -> str:
        return self.participant.name


class StandingsCalculator:
    """Computes standings from the roster and every recorded round.

    Calculation is side-effect free and may be repeated at any time.
    """

    def compute_base_points(
        self, rounds: Sequence[RoundData]
    ) -> Dict[ParticipantId, int]:
        """Sum rank points per participant over all rounds."""
        base_points: Dict[ParticipantId, int] = {}
        for round_data in rounds:
            for table in round_data.tables:
                for participant_id in table.participant_ids:
                    rank = table.rank_of(participant_id)
                    if rank is None:
                        continue
                    base_points[participant_id] = base_points.get(
                        participant_id, 0
                    ) + points_for_rank(rank)
        return base_points

    def compute_standings(
        self, roster: Sequence[Participant], rounds: Sequence[RoundData]
    ) -> List[StandingsEntry]:
        """Rank the roster by total score, highest first.

        Ties keep roster order.

        Args:
            roster: Participants in registration order
            rounds: Every round recorded so far

        Returns:
            One StandingsEntry per participant
        """
        base_points = self.compute_base_points(rounds)
        rounds_played: Dict[ParticipantId, int] = {}
        for round_data in rounds:
            for table in round_data.tables:
                for participant_id in table.ranks:
                    rounds_played[participant_id] = rounds_played.get(participant_id, 0) + 1

        unsorted = [
            StandingsEntry(
                position=0,
                participant=participant,
                base_points=base_points.get(participant.id, 0),
                bonus_points=participant.bonus_points,
                rounds_played=rounds_played.get(participant.id, 0),
            )
            for participant in roster
        ]
        # sorted() is stable, ties stay in roster order
        standings = sorted(unsorted, key=lambda entry: entry.total_score, reverse=True)
        for position, entry in enumerate(standings, start=1):
            entry.position = position
        return standings

    def top(
        self,
        roster: Sequence[Participant],
        rounds: Sequence[RoundData],
        count: int,
    ) -> List[Participant]:
        """The count best participants by current standings."""
        standings = self.compute_standings(roster, rounds)
        leaders = [entry.participant for entry in standings[:count]]
        logger.debug(
            "Top %d: %s",
            count,
            ", ".join(f"{e.name} ({e.total_score})" for e in standings[:count]),
        )
        return leaders
