"""Anti-repeat table pairing.

Seats participants at tables so that as few pairs as possible share a
table again. The search is a bounded randomized local search: shuffle,
then try random two-seat swaps and keep the ones that lower the number of
repeat pairs.
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

from tableswiss.constants import DEFAULT_MAX_PAIRING_TRIALS, TABLE_NAME_FORMAT
from tableswiss.exceptions import StructureMismatchException
from tableswiss.models.tournament.pairing_history import PairingHistory
from tableswiss.models.tournament.round_data import RoundData
from tableswiss.models.tournament.table import Table
from tableswiss.pairing.table_structure import TableStructure
from tableswiss.type_hints import ParticipantId, Slots
from tableswiss.utils import generate_id, setup_logger

logger = setup_logger(__name__)


def _seating_cost(
    order: Sequence[ParticipantId], slots: Slots, history: PairingHistory
) -> int:
    """Count repeat pairs when order is cut into tables of slots."""
    cost = 0
    index = 0
    for size in slots:
        seated = order[index : index + size]
        for i in range(size):
            for j in range(i + 1, size):
                if history.have_met(seated[i], seated[j]):
                    cost += 1
        index += size
    return cost


def repeat_cost(tables: Sequence[Table], history: PairingHistory) -> int:
    """Number of pairs in tables that already shared a table before.

    Each pair counts once, however many earlier rounds it met in.
    """
    return sum(
        1
        for table in tables
        for participant1_id, participant2_id in table.pairs()
        if history.have_met(participant1_id, participant2_id)
    )


def _check_structure(
    participant_ids: Sequence[ParticipantId], structure: TableStructure
) -> None:
    if len(set(participant_ids)) != len(participant_ids):
        raise StructureMismatchException("Duplicate participant ids in pairing input")
    if structure.total_participants != len(participant_ids):
        raise StructureMismatchException(
            f"Table structure seats {structure.total_participants} but "
            f"{len(participant_ids)} participants were given"
        )


def create_anti_repeat_pairings(
    participant_ids: Sequence[ParticipantId],
    structure: TableStructure,
    previous_rounds: Sequence[RoundData] = (),
    rng: Optional[random.Random] = None,
    max_trials: int = DEFAULT_MAX_PAIRING_TRIALS,
) -> List[Table]:
    """Seat participants at tables, minimizing repeat pairs.

    Parameters
    ----------
    participant_ids : sequence of str
        Everyone to seat this round.
    structure : TableStructure
        Table sizes to fill. Seats must equal the number of participants.
    previous_rounds : sequence of RoundData
        Every earlier round; pairs that met in any of them cost 1.
    rng : random.Random, optional
        Source of randomness. Seed it for reproducible tables.
    max_trials : int
        Swap attempts before giving up on further improvement.

    Returns
    -------
    list of Table
        Tables in slot order (5s, then 4s, then 3s), labelled
        Table 1 onwards, with no ranks recorded.

    Raises
    ------
    StructureMismatchException
        If the structure does not seat exactly the given participants.
    """
    _check_structure(participant_ids, structure)
    rng = rng if rng is not None else random.Random()
    history = PairingHistory.from_rounds(previous_rounds)
    slots = structure.slots()

    order = list(participant_ids)
    rng.shuffle(order)

    best_cost = _seating_cost(order, slots, history)
    initial_cost = best_cost
    trials = 0

    # the current order is always the best found, only improving swaps stay
    while best_cost > 0 and trials < max_trials:
        trials += 1
        idx1 = rng.randrange(len(order))
        idx2 = rng.randrange(len(order))
        order[idx1], order[idx2] = order[idx2], order[idx1]

        new_cost = _seating_cost(order, slots, history)
        if new_cost < best_cost:
            best_cost = new_cost
        else:
            order[idx1], order[idx2] = order[idx2], order[idx1]

    logger.debug(
        "Anti-repeat search: cost %d -> %d after %d trial(s)",
        initial_cost,
        best_cost,
        trials,
    )
    if best_cost > 0:
        logger.info("Best pairing found still repeats %d pair(s)", best_cost)

    tables = []
    index = 0
    for position, size in enumerate(slots, start=1):
        tables.append(
            Table(
                id=generate_id(rng),
                name=TABLE_NAME_FORMAT.format(position=position),
                participant_ids=tuple(order[index : index + size]),
            )
        )
        index += size
    return tables
