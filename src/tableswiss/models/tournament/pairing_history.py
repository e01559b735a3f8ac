"""Record of which participants have already shared a table."""

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

from dataclasses import dataclass, field
from typing import Iterable, Set

from tableswiss.models.tournament.round_data import RoundData
from tableswiss.models.tournament.table import Table
from tableswiss.type_hints import Pair, ParticipantId


@dataclass
class PairingHistory:
    """
    Tracks historical table assignments to discourage repeat meetings.

    Attributes
    ----------
    previous_pairs : set of frozenset of str
        Every unordered participant pair that has shared a table.
    """

    previous_pairs: Set[Pair] = field(default_factory=set)

    @classmethod
    def from_rounds(cls, rounds: Iterable[RoundData]) -> "PairingHistory":
        """Build a history from every table of the given rounds."""
        history = cls()
        for round_data in rounds:
            for table in round_data.tables:
                history.add_table(table)
        return history

    def add_pairing(self, participant1_id: ParticipantId, participant2_id: ParticipantId) -> None:
        """Record that two participants have shared a table."""
        pair = frozenset({participant1_id, participant2_id})
        self.previous_pairs.add(pair)

    def add_table(self, table: Table) -> None:
        for participant1_id, participant2_id in table.pairs():
            self.add_pairing(participant1_id, participant2_id)

    def have_met(self, participant1_id: ParticipantId, participant2_id: ParticipantId) -> bool:
        """Check if two participants have previously shared a table."""
        return frozenset({participant1_id, participant2_id}) in self.previous_pairs

    def __len__(self) -> int:
        return len(self.previous_pairs)
