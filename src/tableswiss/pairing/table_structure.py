"""Table structure allocation.

Splits a participant count into tables of three, four and five seats.
The split favours four-seat tables, absorbs a remainder of one to three
participants by growing 4s into 5s, and only falls back to 3s for small
rosters.
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
from typing import Any, Dict, List

from tableswiss.constants import MIN_PARTICIPANTS, STANDARD_TABLE_SIZE
from tableswiss.exceptions import (
    InsufficientParticipantsException,
    StructureMismatchException,
)
from tableswiss.models.enums import TableSize
from tableswiss.type_hints import Slots
from tableswiss.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class TableStructure:
    """How many tables of each legal size a round uses.

    Attributes
    ----------
    count3 : int
        Tables of three.
    count4 : int
        Tables of four.
    count5 : int
        Tables of five.
    """

    count3: int = 0
    count4: int = 0
    count5: int = 0

    def __post_init__(self) -> None:
        if min(self.count3, self.count4, self.count5) < 0:
            raise StructureMismatchException(f"Negative table count in {self}")

    @property
    def total_participants(self) -> int:
        return 3 * self.count3 + 4 * self.count4 + 5 * self.count5

    @property
    def table_count(self) -> int:
        return self.count3 + self.count4 + self.count5

    def slots(self) -> Slots:
        """Table sizes in seating order: all 5s, then 4s, then 3s."""
        return (
            [int(TableSize.FIVE)] * self.count5
            + [int(TableSize.FOUR)] * self.count4
            + [int(TableSize.THREE)] * self.count3
        )

    def to_dict(self) -> Dict[int, int]:
        return {3: self.count3, 4: self.count4, 5: self.count5}

    @classmethod
    def from_dict(cls, data: Dict[Any, int]) -> "TableStructure":
        return cls(
            count3=int(data.get(3, data.get("3", 0))),
            count4=int(data.get(4, data.get("4", 0))),
            count5=int(data.get(5, data.get("5", 0))),
        )


def allocate_tables(total_participants: int) -> TableStructure:
    """Split total_participants into tables of 3, 4 and 5.

    Start from as many 4s as fit, then settle the remainder:

    * 0: nothing to do.
    * 1: turn one 4 into a 5.
    * 2: turn two 4s into 5s, or with fewer than two 4s use two 3s.
    * 3: turn three 4s into 5s, or with fewer than three 4s add one 3.

    Parameters
    ----------
    total_participants : int
        Participants to seat.

    Returns
    -------
    TableStructure
        Table counts whose seats add up to total_participants.

    Raises
    ------
    InsufficientParticipantsException
        If fewer than three participants are given.
    StructureMismatchException
        If the counts do not add up to total_participants.
    """
    if total_participants < MIN_PARTICIPANTS:
        raise InsufficientParticipantsException(total_participants, MIN_PARTICIPANTS)

    count4, remainder = divmod(total_participants, STANDARD_TABLE_SIZE)
    count5 = 0
    count3 = 0

    if remainder == 1:
        # with count4 == 0 this would be unresolved, only n == 1 gets there
        if count4 >= 1:
            count4 -= 1
            count5 += 1
    elif remainder == 2:
        if count4 >= 2:
            count4 -= 2
            count5 += 2
        else:
            count4 = 0
            count5 = 0
            count3 = 2
    elif remainder == 3:
        if count4 >= 3:
            count4 -= 3
            count5 += 3
        else:
            count3 = 1

    structure = TableStructure(count3=count3, count4=count4, count5=count5)
    if structure.total_participants != total_participants:
        raise StructureMismatchException(
            f"Allocated {structure.total_participants} seats for "
            f"{total_participants} participants"
        )

    logger.debug(
        "Allocated %d participants as %d x5, %d x4, %d x3",
        total_participants,
        count5,
        count4,
        count3,
    )
    return structure
