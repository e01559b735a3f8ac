"""Enumerations shared across the tournament models."""

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

from enum import Enum, IntEnum

from tableswiss.constants import PHASE_ACTIVE, PHASE_COMPLETED, PHASE_REGISTRATION


class TableSize(IntEnum):
    """Legal number of seats at a table."""

    THREE = 3
    FOUR = 4
    FIVE = 5


class TournamentPhase(str, Enum):
    """Where a tournament is in its lifecycle.

    Transitions run strictly forward; only a reset goes back to
    registration.
    """

    REGISTRATION = PHASE_REGISTRATION
    ACTIVE = PHASE_ACTIVE
    COMPLETED = PHASE_COMPLETED
