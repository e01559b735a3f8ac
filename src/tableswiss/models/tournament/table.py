"""Data model for a single table within a round."""

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
from typing import Any, Dict, List, Optional, Tuple

from tableswiss.type_hints import MaybeRank, ParticipantId, Rank, Seating, TableRanks


@dataclass
class Table:
    """A group of participants playing together in one round.

    Membership is fixed at creation; only ranks change afterwards.

    Attributes
    ----------
    id : str
        Generated identifier, unique within the tournament.
    name : str
        Display label, e.g. Table 2 or Final Table.
    participant_ids : tuple of str
        Seated participants in seating order.
    ranks : dict of str to int
        Finish rank per participant. Absent entries are unscored.
    """

    id: str
    name: str
    participant_ids: Seating
    ranks: TableRanks = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.participant_ids = tuple(self.participant_ids)

    @property
    def size(self) -> int:
        return len(self.participant_ids)

    def __contains__(self, participant_id: object) -> bool:
        return participant_id in self.participant_ids

    def rank_of(self, participant_id: ParticipantId) -> MaybeRank:
        """Return the recorded rank for a participant, or None."""
        return self.ranks.get(participant_id)

    def holder_of_rank(self, rank: Rank) -> Optional[ParticipantId]:
        """Return who holds rank at this table, or None."""
        for participant_id, held in self.ranks.items():
            if held == rank:
                return participant_id
        return None

    @property
    def unscored_participant_ids(self) -> List[ParticipantId]:
        return [pid for pid in self.participant_ids if pid not in self.ranks]

    @property
    def is_fully_scored(self) -> bool:
        return not self.unscored_participant_ids

    def pairs(self) -> List[Tuple[ParticipantId, ParticipantId]]:
        """All unordered participant pairs sharing this table."""
        ids = self.participant_ids
        return [(ids[i], ids[j]) for i in range(len(ids)) for j in range(i + 1, len(ids))]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize table to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "participant_ids": list(self.participant_ids),
            "ranks": dict(self.ranks),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Table":
        """Deserialize table from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            participant_ids=tuple(str(pid) for pid in data["participant_ids"]),
            ranks={str(k): int(v) for k, v in data.get("ranks", {}).items()},
        )
