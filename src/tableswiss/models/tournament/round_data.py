"""Data model for tournament round."""

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
from typing import Any, Dict, List, Optional

from tableswiss.models.tournament.table import Table
from tableswiss.type_hints import ParticipantId, Seat


@dataclass
class RoundData:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    tables : list of Table
        Tables of this round in display order.
    is_final : bool
        Marks the finals round.
    """

    round_number: int
    tables: List[Table] = field(default_factory=list)
    is_final: bool = False

    def get_table(self, table_id: str) -> Optional[Table]:
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    @property
    def participant_ids(self) -> List[ParticipantId]:
        return [pid for table in self.tables for pid in table.participant_ids]

    @property
    def unscored_seats(self) -> List[Seat]:
        """(table id, participant id) for every seat without a rank."""
        return [
            (table.id, pid)
            for table in self.tables
            for pid in table.unscored_participant_ids
        ]

    @property
    def is_fully_scored(self) -> bool:
        return all(table.is_fully_scored for table in self.tables)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "tables": [t.to_dict() for t in self.tables],
            "is_final": self.is_final,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            round_number=data["round_number"],
            tables=[Table.from_dict(t) for t in data.get("tables", [])],
            is_final=data.get("is_final", False),
        )
