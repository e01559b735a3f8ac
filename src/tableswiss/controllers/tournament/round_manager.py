"""Round management for tournaments.

This module handles all round-related operations including table
allocation, anti-repeat pairing, finals seeding and round history.
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

import random
from typing import List, Optional, Sequence

from tableswiss.constants import DEFAULT_MAX_PAIRING_TRIALS, FINAL_TABLE_NAME
from tableswiss.exceptions import RoundNotFoundException, StructureMismatchException
from tableswiss.models.enums import TableSize
from tableswiss.models.tournament.round_data import RoundData
from tableswiss.models.tournament.table import Table
from tableswiss.pairing import allocate_tables, create_anti_repeat_pairings
from tableswiss.type_hints import ParticipantId
from tableswiss.utils import generate_id, setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation for tournaments.

    This class is responsible for:
    - Allocating table sizes for each qualifying round
    - Pairing participants with the full round history
    - Seating the final table
    - Keeping the append-only list of rounds
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_pairing_trials: int = DEFAULT_MAX_PAIRING_TRIALS,
    ):
        """Initialize the round manager.

        Args:
            rng: Random source for pairing; a fresh unseeded one if omitted
            max_pairing_trials: Swap trials per round for the anti-repeat search
        """
        self.rng = rng if rng is not None else random.Random()
        self.max_pairing_trials = max_pairing_trials
        self.rounds: List[RoundData] = []

    @property
    def current_round_number(self) -> int:
        """Get the current round number (1-indexed).

        Returns:
            The current round number, or 0 if no rounds have been created.
        """
        return len(self.rounds)

    @property
    def current_round(self) -> Optional[RoundData]:
        return self.rounds[-1] if self.rounds else None

    def get_round(self, round_number: int) -> RoundData:
        """Get data for a specific round.

        Args:
            round_number: The round number (1-indexed)

        Raises:
            RoundNotFoundException: If no such round exists
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        raise RoundNotFoundException(
            f"Round {round_number} does not exist "
            f"({len(self.rounds)} round(s) played)"
        )

    def create_qualifying_round(
        self, participant_ids: Sequence[ParticipantId]
    ) -> RoundData:
        """Pair the next qualifying round and append it.

        Args:
            participant_ids: Everyone playing this round

        Returns:
            The new round
        """
        round_number = len(self.rounds) + 1
        structure = allocate_tables(len(participant_ids))
        logger.info(
            f"Creating round {round_number} with {len(participant_ids)} participants "
            f"({structure.count5} x5, {structure.count4} x4, {structure.count3} x3)"
        )

        tables = create_anti_repeat_pairings(
            participant_ids,
            structure,
            self.rounds,
            rng=self.rng,
            max_trials=self.max_pairing_trials,
        )
        round_data = RoundData(round_number=round_number, tables=tables)
        self.rounds.append(round_data)
        return round_data

    def create_finals_round(self, finalist_ids: Sequence[ParticipantId]) -> RoundData:
        """Seat the finalists at a single final table and append the round.

        Args:
            finalist_ids: Finalists in standings order

        Raises:
            StructureMismatchException: If the finalists cannot fill a legal table
        """
        if len(finalist_ids) not in {size.value for size in TableSize}:
            raise StructureMismatchException(
                f"A final table cannot seat {len(finalist_ids)} participants"
            )

        round_number = len(self.rounds) + 1
        final_table = Table(
            id=generate_id(self.rng),
            name=FINAL_TABLE_NAME,
            participant_ids=tuple(finalist_ids),
        )
        round_data = RoundData(
            round_number=round_number, tables=[final_table], is_final=True
        )
        self.rounds.append(round_data)
        logger.info(f"Created finals (round {round_number}) for {list(finalist_ids)}")
        return round_data

    def clear(self) -> None:
        """Forget every round."""
        self.rounds = []
