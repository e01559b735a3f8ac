"""Table Swiss: Swiss-style tournaments played at tables of three to five.

The engine allocates table sizes, pairs each round to avoid repeat
meetings, scores finish ranks and walks the tournament from registration
through the qualifying rounds and the finals to completion.
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

__version__ = "0.1.0"

from tableswiss.controllers.tournament import (
    StandingsCalculator,
    StandingsEntry,
    points_for_rank,
)
from tableswiss.models import Participant, TableSize, TournamentPhase
from tableswiss.models.tournament import (
    PairingHistory,
    RoundData,
    Table,
    TournamentConfig,
)
from tableswiss.models.tournament.tournament import Tournament
from tableswiss.pairing import (
    TableStructure,
    allocate_tables,
    create_anti_repeat_pairings,
    repeat_cost,
)

__all__ = [
    "PairingHistory",
    "Participant",
    "RoundData",
    "StandingsCalculator",
    "StandingsEntry",
    "Table",
    "TableSize",
    "TableStructure",
    "Tournament",
    "TournamentConfig",
    "TournamentPhase",
    "allocate_tables",
    "create_anti_repeat_pairings",
    "points_for_rank",
    "repeat_cost",
]
