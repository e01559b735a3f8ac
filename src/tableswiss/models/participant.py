"""A participant registered in a tournament."""

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
from typing import Any, Dict

from tableswiss.type_hints import ParticipantId


@dataclass(slots=True)
class Participant:
    """
    A single tournament entrant.

    The identifier is fixed for the life of the tournament; bonus_points
    is a manually managed adjustment added on top of rank points.

    Attributes
    ----------
    id : str
        Unique identifier.
    name : str
        Display name.
    bonus_points : int
        Cumulative manual score adjustment, default 0.
    """

    id: ParticipantId
    name: str
    bonus_points: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {"id": self.id, "name": self.name, "bonus_points": self.bonus_points}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            bonus_points=int(data.get("bonus_points", 0)),
        )

    def __str__(self) -> str:
        return self.name
