import random

import pytest

from tableswiss.exceptions import StructureMismatchException
from tableswiss.models.tournament import PairingHistory, RoundData, Table
from tableswiss.pairing import (
    TableStructure,
    allocate_tables,
    create_anti_repeat_pairings,
    repeat_cost,
)


def ids(n):
    return [f"p{i}" for i in range(n)]


@pytest.mark.parametrize("n", [3, 6, 7, 9, 12, 14, 23])
def test_tables_partition_participants(n):
    structure = allocate_tables(n)
    tables = create_anti_repeat_pairings(ids(n), structure, rng=random.Random(n))

    assert [t.size for t in tables] == structure.slots()
    seated = [pid for t in tables for pid in t.participant_ids]
    assert sorted(seated) == sorted(ids(n))
    assert [t.name for t in tables] == [f"Table {i}" for i in range(1, len(tables) + 1)]
    assert all(t.ranks == {} for t in tables)
    assert len({t.id for t in tables}) == len(tables)


def test_same_seed_same_tables():
    structure = allocate_tables(13)
    first = create_anti_repeat_pairings(ids(13), structure, rng=random.Random(7))
    second = create_anti_repeat_pairings(ids(13), structure, rng=random.Random(7))
    assert [t.to_dict() for t in first] == [t.to_dict() for t in second]


def test_zero_trials_keeps_the_shuffled_order():
    participants = ids(9)
    expected = list(participants)
    random.Random(3).shuffle(expected)

    history_round = RoundData(
        round_number=1,
        tables=[Table(id="t", name="Table 1", participant_ids=tuple(participants[:5]))],
    )
    tables = create_anti_repeat_pairings(
        participants,
        allocate_tables(9),
        [history_round],
        rng=random.Random(3),
        max_trials=0,
    )
    assert [pid for t in tables for pid in t.participant_ids] == expected


def test_separates_previous_tablemates_when_possible():
    participants = ids(12)
    previous = RoundData(
        round_number=1,
        tables=[Table(id="t1", name="Table 1", participant_ids=("p0", "p1", "p2"))],
    )
    tables = create_anti_repeat_pairings(
        participants, allocate_tables(12), [previous], rng=random.Random(11)
    )

    assert repeat_cost(tables, PairingHistory.from_rounds([previous])) == 0
    trio_tables = {t.id for t in tables for pid in ("p0", "p1", "p2") if pid in t}
    assert len(trio_tables) == 3


def test_no_history_needs_no_search():
    tables = create_anti_repeat_pairings(ids(8), allocate_tables(8), rng=random.Random(1))
    assert repeat_cost(tables, PairingHistory()) == 0


def test_repeat_cost_counts_each_pair_once():
    table = Table(id="a", name="Table 1", participant_ids=("p0", "p1", "p2"))
    history = PairingHistory()
    history.add_pairing("p0", "p1")
    history.add_pairing("p1", "p0")

    assert len(history) == 1
    assert repeat_cost([table], history) == 1


def test_structure_must_match_participants():
    with pytest.raises(StructureMismatchException):
        create_anti_repeat_pairings(ids(8), TableStructure(count5=1, count4=1))


def test_duplicate_participants_rejected():
    with pytest.raises(StructureMismatchException):
        create_anti_repeat_pairings(["a", "a", "b"], TableStructure(count3=1))


def _round_of(number, *groups):
    tables = [
        Table(id=f"r{number}t{i}", name=f"Table {i}", participant_ids=tuple(group))
        for i, group in enumerate(groups, start=1)
    ]
    return RoundData(round_number=number, tables=tables)


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4, 5])
def test_search_never_ends_worse_than_its_shuffle(seed):
    participants = ids(8)
    # every 4-seat table must repeat at least one pair
    previous = [
        _round_of(1, ids(8)[:4], ids(8)[4:]),
        _round_of(2, ["p0", "p1", "p4", "p5"], ["p2", "p3", "p6", "p7"]),
    ]
    history = PairingHistory.from_rounds(previous)
    structure = allocate_tables(8)

    shuffled = create_anti_repeat_pairings(
        participants, structure, previous, rng=random.Random(seed), max_trials=0
    )
    searched = create_anti_repeat_pairings(
        participants, structure, previous, rng=random.Random(seed)
    )

    assert repeat_cost(searched, history) <= repeat_cost(shuffled, history)
    assert repeat_cost(searched, history) > 0


def test_same_table_every_round_costs_what_it_must():
    previous = [_round_of(1, ["a", "b", "c", "d"]), _round_of(2, ["a", "b", "c", "d"])]
    history = PairingHistory.from_rounds(previous)
    tables = create_anti_repeat_pairings(
        ["a", "b", "c", "d"], allocate_tables(4), previous, rng=random.Random(8)
    )
    assert repeat_cost(tables, history) == 6
