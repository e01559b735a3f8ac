"""TournamentConfig data class."""

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

from tableswiss.constants import (
    DEFAULT_FINALS_SIZE,
    DEFAULT_MAX_PAIRING_TRIALS,
    DEFAULT_QUALIFYING_ROUNDS,
    MAX_TABLE_SIZE,
    MIN_TABLE_SIZE,
)
from tableswiss.exceptions import InvalidConfigurationException


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    num_qualifying_rounds : int
        Swiss rounds played before the finals.
    finals_size : int
        Number of top participants seated at the final table.
    max_pairing_trials : int
        Swap trials the anti-repeat search may spend per round.
    """

    name: str = "Untitled Tournament"
    num_qualifying_rounds: int = DEFAULT_QUALIFYING_ROUNDS
    finals_size: int = DEFAULT_FINALS_SIZE
    max_pairing_trials: int = DEFAULT_MAX_PAIRING_TRIALS

    def __post_init__(self) -> None:
        if self.num_qualifying_rounds < 1:
            raise InvalidConfigurationException(
                f"num_qualifying_rounds must be at least 1: {self.num_qualifying_rounds}"
            )
        if not MIN_TABLE_SIZE <= self.finals_size <= MAX_TABLE_SIZE:
            raise InvalidConfigurationException(
                f"finals_size must be between {MIN_TABLE_SIZE} and "
                f"{MAX_TABLE_SIZE}: {self.finals_size}"
            )
        if self.max_pairing_trials < 0:
            raise InvalidConfigurationException(
                f"max_pairing_trials cannot be negative: {self.max_pairing_trials}"
            )

    @property
    def total_rounds(self) -> int:
        """Qualifying rounds plus the finals."""
        return self.num_qualifying_rounds + 1

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "num_qualifying_rounds": self.num_qualifying_rounds,
            "finals_size": self.finals_size,
            "max_pairing_trials": self.max_pairing_trials,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            name=data.get("name", "Untitled Tournament"),
            num_qualifying_rounds=data.get(
                "num_qualifying_rounds", DEFAULT_QUALIFYING_ROUNDS
            ),
            finals_size=data.get("finals_size", DEFAULT_FINALS_SIZE),
            max_pairing_trials=data.get(
                "max_pairing_trials", DEFAULT_MAX_PAIRING_TRIALS
            ),
        )
