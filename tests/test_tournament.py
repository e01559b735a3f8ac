import pytest

from conftest import score_round
from tableswiss import Tournament, TournamentConfig, TournamentPhase
from tableswiss.exceptions import (
    IncompleteRoundException,
    InsufficientParticipantsException,
    InvalidConfigurationException,
    InvalidParticipantDataException,
    InvalidRankException,
    ParticipantNotFoundException,
    RoundNotFoundException,
    TableNotFoundException,
    TournamentStateException,
)


def test_new_tournament_is_in_registration():
    tournament = Tournament(name="Club Night")
    assert tournament.name == "Club Night"
    assert tournament.phase is TournamentPhase.REGISTRATION
    assert tournament.current_round is None
    assert tournament.current_round_number == 0


def test_start_needs_three_participants(make_tournament):
    tournament = make_tournament(2)
    with pytest.raises(InsufficientParticipantsException):
        tournament.start()
    assert tournament.phase is TournamentPhase.REGISTRATION
    assert tournament.rounds == []


def test_start_pairs_round_one(make_tournament):
    tournament = make_tournament(9)
    first = tournament.start()

    assert tournament.phase is TournamentPhase.ACTIVE
    assert first.round_number == 1
    assert sorted(t.size for t in first.tables) == [4, 5]
    assert sorted(first.participant_ids) == sorted(tournament.participants)
    assert tournament.round_name(1) == "Round 1"


def test_cannot_start_twice(make_tournament):
    tournament = make_tournament(4)
    tournament.start()
    with pytest.raises(TournamentStateException):
        tournament.start()


def test_roster_is_frozen_after_start(make_tournament):
    tournament = make_tournament(5)
    tournament.start()
    with pytest.raises(TournamentStateException):
        tournament.add_participant("Late")
    with pytest.raises(TournamentStateException):
        tournament.remove_participant("p1")
    assert len(tournament.participants) == 5


def test_remove_participant_during_registration(make_tournament):
    tournament = make_tournament(4)
    removed = tournament.remove_participant("p2")
    assert removed.name == "P2"
    assert [p.id for p in tournament.roster] == ["p1", "p3", "p4"]
    with pytest.raises(ParticipantNotFoundException):
        tournament.remove_participant("p2")


def test_add_participants_is_all_or_nothing(make_tournament):
    tournament = make_tournament(2)
    with pytest.raises(InvalidParticipantDataException):
        tournament.add_participants(["Ann", "   "])
    assert len(tournament.participants) == 2

    added = tournament.add_participants(["  Ann   Lee ", "Bob"])
    assert [p.name for p in added] == ["Ann Lee", "Bob"]


def test_incomplete_round_blocks_advance_without_changes(make_tournament):
    tournament = make_tournament(8)
    first = tournament.start()
    table = first.tables[0]
    tournament.record_rank(1, table.id, table.participant_ids[0], 1)
    snapshot = tournament.to_dict()

    with pytest.raises(IncompleteRoundException) as exc_info:
        tournament.advance_round()

    assert exc_info.value.round_number == 1
    assert len(exc_info.value.unscored_seats) == 7
    assert tournament.to_dict() == snapshot


def test_forced_advance_pairs_next_round(make_tournament):
    tournament = make_tournament(8)
    tournament.start()
    second = tournament.advance_round(force_if_incomplete=True)
    assert second.round_number == 2
    assert tournament.current_round is second


def test_full_tournament_flow(make_tournament):
    tournament = make_tournament(9)
    tournament.start()
    for expected_round in (2, 3):
        score_round(tournament)
        assert tournament.is_current_round_complete
        new_round = tournament.advance_round()
        assert new_round.round_number == expected_round
        assert not new_round.is_final

    score_round(tournament)
    expected_finalists = [e.participant_id for e in tournament.standings()[:4]]
    finals = tournament.advance_round()

    assert finals.is_final
    assert finals.round_number == 4
    assert tournament.round_name(4) == "Finals"
    assert len(finals.tables) == 1
    assert finals.tables[0].name == "Final Table"
    assert list(finals.tables[0].participant_ids) == expected_finalists

    score_round(tournament)
    assert tournament.advance_round() is None
    assert tournament.phase is TournamentPhase.COMPLETED
    assert tournament.tournament_over

    with pytest.raises(TournamentStateException):
        tournament.advance_round()


def test_finals_follow_standings_including_bonus(make_tournament):
    tournament = make_tournament(8, num_qualifying_rounds=1)
    first = tournament.start()
    score_round(tournament)

    third_place = first.tables[0].participant_ids[2]
    second_places = [t.participant_ids[1] for t in first.tables]
    tournament.adjust_bonus(third_place, 2)

    finals = tournament.advance_round()
    finalists = finals.tables[0].participant_ids

    assert len(finalists) == 4
    assert third_place in finalists
    assert finalists[2] == third_place
    assert len(set(second_places) & set(finalists)) == 1
    assert set(t.participant_ids[0] for t in first.tables) <= set(finalists)


def test_small_roster_sends_everyone_to_finals(make_tournament):
    tournament = make_tournament(3, num_qualifying_rounds=1)
    tournament.start()
    score_round(tournament)
    finals = tournament.advance_round()
    assert sorted(finals.tables[0].participant_ids) == ["p1", "p2", "p3"]


def test_invalid_ranks_leave_state_unchanged(make_tournament):
    tournament = make_tournament(8)
    first = tournament.start()
    table = first.tables[0]
    a, b = table.participant_ids[:2]
    tournament.record_rank(1, table.id, a, 1)
    snapshot = tournament.to_dict()

    with pytest.raises(InvalidRankException):
        tournament.record_rank(1, table.id, b, 1)
    with pytest.raises(InvalidRankException):
        tournament.record_rank(1, table.id, b, 5)
    with pytest.raises(InvalidRankException):
        tournament.record_rank(1, table.id, b, 0)
    with pytest.raises(InvalidRankException):
        tournament.record_table_ranks(1, table.id, {a: 2, b: 2})
    with pytest.raises(TableNotFoundException):
        tournament.record_rank(1, "nope", b, 2)
    with pytest.raises(ParticipantNotFoundException):
        tournament.record_rank(1, table.id, first.tables[1].participant_ids[0], 2)
    with pytest.raises(RoundNotFoundException):
        tournament.record_rank(2, table.id, b, 2)

    assert tournament.to_dict() == snapshot


def test_rank_can_be_changed_and_cleared(make_tournament):
    tournament = make_tournament(4)
    first = tournament.start()
    table = first.tables[0]
    pid = table.participant_ids[0]

    assert tournament.record_rank(1, table.id, pid, "2") == 2
    assert tournament.record_rank(1, table.id, pid, 1) == 1
    assert tournament.standings()[0].base_points == 7
    assert tournament.record_rank(1, table.id, pid, None) is None
    assert table.rank_of(pid) is None


def test_ranks_need_a_started_tournament(make_tournament):
    tournament = make_tournament(4)
    with pytest.raises(TournamentStateException):
        tournament.record_rank(1, "t", "p1", 1)


def test_ranks_stay_editable_after_completion(make_tournament):
    tournament = make_tournament(4, num_qualifying_rounds=1)
    tournament.start()
    score_round(tournament)
    finals = tournament.advance_round()
    score_round(tournament)
    tournament.advance_round()

    table = finals.tables[0]
    winner, runner_up = table.participant_ids[:2]
    tournament.record_table_ranks(finals.round_number, table.id, {winner: 2, runner_up: 1})
    assert table.rank_of(runner_up) == 1


def test_bonus_adjustments(make_tournament):
    tournament = make_tournament(3)
    assert tournament.adjust_bonus("p1", 3) == 3
    assert tournament.adjust_bonus("p1", -5) == -2
    assert tournament.set_bonus("p1", 10) == 10
    assert tournament.adjust_bonus("p1", "2") == 12

    with pytest.raises(InvalidParticipantDataException):
        tournament.adjust_bonus("p1", "lots")
    with pytest.raises(InvalidParticipantDataException):
        tournament.adjust_bonus("p1", 1.5)
    with pytest.raises(ParticipantNotFoundException):
        tournament.adjust_bonus("ghost", 1)
    assert tournament.get_participant("p1").bonus_points == 12


def test_reset_returns_to_registration(make_tournament):
    tournament = make_tournament(6, name="Cup")
    tournament.start()
    tournament.reset()

    assert tournament.phase is TournamentPhase.REGISTRATION
    assert tournament.participants == {}
    assert tournament.rounds == []
    assert tournament.name == "Cup"


def test_round_trip_through_dict(make_tournament):
    tournament = make_tournament(7, name="Saved")
    tournament.start()
    score_round(tournament)
    tournament.adjust_bonus("p3", 4)
    tournament.advance_round()

    restored = Tournament.from_dict(tournament.to_dict())

    assert restored.to_dict() == tournament.to_dict()
    assert restored.phase is TournamentPhase.ACTIVE
    assert [e.total_score for e in restored.standings()] == [
        e.total_score for e in tournament.standings()
    ]


def test_from_dict_rejects_started_tournament_without_rounds():
    with pytest.raises(TournamentStateException):
        Tournament.from_dict({"phase": "active", "participants": [], "rounds": []})


@pytest.mark.parametrize(
    "kwargs",
    [{"num_qualifying_rounds": 0}, {"finals_size": 2}, {"finals_size": 6}, {"max_pairing_trials": -1}],
)
def test_invalid_config(kwargs):
    with pytest.raises(InvalidConfigurationException):
        TournamentConfig(**kwargs)


def test_config_total_rounds():
    assert TournamentConfig().total_rounds == 4
    assert TournamentConfig(num_qualifying_rounds=1).total_rounds == 2


def test_last_qualifying_round_can_lift_fifth_place_into_finals(make_tournament):
    tournament = make_tournament(8)
    tournament.start()
    tournament.advance_round(force_if_incomplete=True)
    tournament.advance_round(force_if_incomplete=True)
    for pid, bonus in {"p1": 100, "p2": 90, "p3": 80, "p4": 20, "p5": 15}.items():
        tournament.set_bonus(pid, bonus)
    assert [e.participant_id for e in tournament.standings()[:5]] == [
        "p1", "p2", "p3", "p4", "p5",
    ]

    third = tournament.current_round
    assert third.round_number == 3
    for table in third.tables:
        # p5 wins its table, p4 finishes last at its table
        order = sorted(table.participant_ids, key=lambda pid: (pid != "p5", pid == "p4"))
        tournament.record_table_ranks(
            3, table.id, {pid: rank for rank, pid in enumerate(order, start=1)}
        )

    finals = tournament.advance_round()

    assert finals.is_final
    finalists = set(finals.tables[0].participant_ids)
    assert finalists == {"p1", "p2", "p3", "p5"}
    assert "p4" not in finalists


def test_infinite_bonus_is_rejected(make_tournament):
    tournament = make_tournament(3)
    with pytest.raises(InvalidParticipantDataException):
        tournament.adjust_bonus("p1", float("inf"))
    with pytest.raises(InvalidParticipantDataException):
        tournament.set_bonus("p1", float("nan"))
    assert tournament.get_participant("p1").bonus_points == 0


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"participants": [{"name": "x"}]},
        {"participants": "nope"},
        {"phase": "paused"},
        {"config": {"num_qualifying_rounds": "three"}},
        {"phase": "active", "rounds": [{"tables": []}]},
        {"participants": [{"id": "a", "name": "A"}, {"id": "a", "name": "B"}]},
    ],
)
def test_from_dict_rejects_malformed_data(data):
    with pytest.raises(TournamentStateException):
        Tournament.from_dict(data)


def _saved(tables, round_number=1):
    return {
        "phase": "active",
        "participants": [{"id": pid, "name": pid.upper()} for pid in "abcd"],
        "rounds": [{"round_number": round_number, "tables": tables}],
    }


def _table(participant_ids, ranks=None):
    return {
        "id": "t1",
        "name": "Table 1",
        "participant_ids": list(participant_ids),
        "ranks": ranks or {},
    }


@pytest.mark.parametrize(
    "data",
    [
        _saved([_table("abcx")]),
        _saved([_table("ab")]),
        _saved([_table("abcd", {"a": 5})]),
        _saved([_table("abcd", {"a": 1, "b": 1})]),
        _saved([_table("abc", {"d": 1})]),
        _saved([_table("abcd")], round_number=2),
    ],
)
def test_from_dict_rejects_inconsistent_rounds(data):
    with pytest.raises(TournamentStateException):
        Tournament.from_dict(data)


def test_from_dict_accepts_consistent_rounds():
    restored = Tournament.from_dict(_saved([_table("abcd", {"a": 1, "b": 2})]))
    assert restored.current_round.tables[0].rank_of("b") == 2
    assert restored.standings()[0].participant_id == "a"
