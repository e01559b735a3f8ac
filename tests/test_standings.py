import pytest

from tableswiss import Participant, RoundData, StandingsCalculator, Table, points_for_rank


@pytest.mark.parametrize(
    "rank, points",
    [(1, 7), (2, 4), (3, 3), (4, 1), (5, 0), (6, 0), (0, 0), (None, 0), (True, 0)],
)
def test_points_for_rank(rank, points):
    assert points_for_rank(rank) == points


def _round(number, table_ranks):
    tables = [
        Table(
            id=f"r{number}t{i}",
            name=f"Table {i}",
            participant_ids=tuple(ranks),
            ranks=dict(ranks),
        )
        for i, ranks in enumerate(table_ranks, start=1)
    ]
    return RoundData(round_number=number, tables=tables)


def test_totals_combine_rank_points_and_bonus():
    ann = Participant(id="a", name="Ann", bonus_points=2)
    bob = Participant(id="b", name="Bob")
    cy = Participant(id="c", name="Cy")
    rounds = [
        _round(1, [{"a": 1, "b": 2, "c": 3}]),
        _round(2, [{"a": 1, "b": 3, "c": 2}]),
        _round(3, [{"a": 2, "b": 1, "c": 3}]),
    ]

    standings = StandingsCalculator().compute_standings([ann, bob, cy], rounds)

    assert [e.name for e in standings] == ["Ann", "Bob", "Cy"]
    assert standings[0].base_points == 18
    assert standings[0].total_score == 20
    assert [e.position for e in standings] == [1, 2, 3]
    assert standings[0].rounds_played == 3


def test_ties_keep_registration_order():
    roster = [Participant(id=pid, name=pid.upper()) for pid in ("x", "y", "z")]
    rounds = [_round(1, [{"z": 1}])]

    standings = StandingsCalculator().compute_standings(roster, rounds)
    assert [e.participant_id for e in standings] == ["z", "x", "y"]


def test_unscored_seats_earn_nothing():
    roster = [Participant(id="a", name="A"), Participant(id="b", name="B")]
    rounds = [
        RoundData(
            round_number=1,
            tables=[Table(id="t", name="Table 1", participant_ids=("a", "b"), ranks={"a": 2})],
        )
    ]
    standings = StandingsCalculator().compute_standings(roster, rounds)
    assert {e.participant_id: e.total_score for e in standings} == {"a": 4, "b": 0}
    assert standings[1].rounds_played == 0


def test_negative_bonus_can_drop_below_zero():
    roster = [Participant(id="a", name="A", bonus_points=-3)]
    assert StandingsCalculator().compute_standings(roster, [])[0].total_score == -3


def test_top_returns_leaders():
    roster = [Participant(id=pid, name=pid) for pid in "abcde"]
    rounds = [_round(1, [{"e": 1, "d": 2, "c": 3, "b": 4, "a": 5}])]
    leaders = StandingsCalculator().top(roster, rounds, 4)
    assert [p.id for p in leaders] == ["e", "d", "c", "b"]
