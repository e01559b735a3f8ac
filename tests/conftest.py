import random

import pytest

from tableswiss import Tournament, TournamentConfig


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_tournament(rng):
    """Build a tournament with ``count`` registered players P1..Pn."""

    def _make(count=8, **config_kwargs):
        tournament = Tournament(config=TournamentConfig(**config_kwargs), rng=rng)
        for i in range(1, count + 1):
            tournament.add_participant(f"P{i}", participant_id=f"p{i}")
        return tournament

    return _make


def score_round(tournament, round_data=None):
    """Give every table ranks in seating order."""
    round_data = round_data or tournament.current_round
    for table in round_data.tables:
        tournament.record_table_ranks(
            round_data.round_number,
            table.id,
            {pid: rank for rank, pid in enumerate(table.participant_ids, start=1)},
        )
