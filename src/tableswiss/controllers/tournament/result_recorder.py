"""Result recording and validation for tournaments.

This module handles recording finish ranks with proper validation and error checking.
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

from typing import Any, Dict, Mapping, Optional

from tableswiss.exceptions import (
    InvalidRankException,
    ParticipantNotFoundException,
    TableNotFoundException,
)
from tableswiss.models.tournament.round_data import RoundData
from tableswiss.models.tournament.table import Table
from tableswiss.type_hints import ParticipantId
from tableswiss.utils import setup_logger
from tableswiss.utils.validation import validate_rank_strict

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating finish ranks.

    This class is responsible for:
    - Checking the table and seat exist in the round
    - Keeping ranks inside 1..table size
    - Keeping ranks distinct within a table

    Every check runs before anything is written, so a rejected entry leaves
    the round untouched.
    """

    def _find_table(self, round_data: RoundData, table_id: str) -> Table:
        table = round_data.get_table(table_id)
        if table is None:
            raise TableNotFoundException(
                f"Table {table_id} not found in round {round_data.round_number}"
            )
        return table

    def _validate_seat(self, table: Table, participant_id: ParticipantId) -> None:
        if participant_id not in table:
            raise ParticipantNotFoundException(
                f"Participant {participant_id} is not seated at {table.name}"
            )

    def record_rank(
        self,
        round_data: RoundData,
        table_id: str,
        participant_id: ParticipantId,
        rank: Any,
    ) -> Optional[int]:
        """Record (or clear, with rank=None) one participant's finish.

        Args:
            round_data: Round holding the table
            table_id: Table the participant sits at
            participant_id: Participant to score
            rank: Finish rank, 1 for the winner; None clears the seat

        Returns:
            The rank stored, as int, or None if cleared

        Raises:
            TableNotFoundException: If the table is not in the round
            ParticipantNotFoundException: If the participant is not at the table
            InvalidRankException: If the rank is out of range or already taken
        """
        table = self._find_table(round_data, table_id)
        self._validate_seat(table, participant_id)
        rank_value = validate_rank_strict(rank, table.size)

        if rank_value is None:
            table.ranks.pop(participant_id, None)
            logger.debug(
                f"Round {round_data.round_number}, {table.name}: "
                f"cleared rank for {participant_id}"
            )
            return None

        holder = table.holder_of_rank(rank_value)
        if holder is not None and holder != participant_id:
            raise InvalidRankException(
                f"Rank {rank_value} at {table.name} is already held by {holder}"
            )

        table.ranks[participant_id] = rank_value
        logger.debug(
            f"Round {round_data.round_number}, {table.name}: "
            f"{participant_id} finished {rank_value}"
        )
        return rank_value

    def record_table_ranks(
        self,
        round_data: RoundData,
        table_id: str,
        ranks: Mapping[ParticipantId, Any],
    ) -> Dict[ParticipantId, int]:
        """Replace all ranks of a table in one step.

        Seats missing from ranks (or mapped to None) become unscored.

        Returns:
            The ranks now stored for the table

        Raises:
            InvalidRankException: If any rank is invalid or two seats share one
        """
        table = self._find_table(round_data, table_id)
        new_ranks: Dict[ParticipantId, int] = {}
        for participant_id, rank in ranks.items():
            self._validate_seat(table, participant_id)
            rank_value = validate_rank_strict(rank, table.size)
            if rank_value is None:
                continue
            if rank_value in new_ranks.values():
                raise InvalidRankException(
                    f"Rank {rank_value} given twice at {table.name}"
                )
            new_ranks[participant_id] = rank_value

        table.ranks = new_ranks
        logger.debug(
            f"Round {round_data.round_number}, {table.name}: ranks set to {new_ranks}"
        )
        return dict(new_ranks)
