import random

import httpx

from tableswiss import Tournament, TournamentPhase
from tableswiss.cli import TournamentSession, create_completer, main
from tableswiss.narrative import NarrativeClient, NarrativeConfig


def make_session(confirm_answer=True, narrative=None, players=()):
    session = TournamentSession(
        Tournament(name="CLI Cup", rng=random.Random(5)),
        narrative=narrative,
        confirm=lambda question: confirm_answer,
    )
    if players:
        session.execute("add " + " ".join(f'"{p}"' for p in players))
    return session


def test_add_and_list_players(capsys):
    session = make_session()
    assert session.execute('add Ann "Bob Stone" Cy')
    session.execute("players")

    out = capsys.readouterr().out
    assert "Added 3 participant(s)" in out
    assert "Bob Stone" in out
    assert [p.name for p in session.tournament.roster] == ["Ann", "Bob Stone", "Cy"]


def test_errors_are_reported_not_raised(capsys):
    session = make_session(players=["Ann", "Bob"])
    assert session.execute("start")
    assert "Need at least 3 participants" in capsys.readouterr().out
    assert session.tournament.phase is TournamentPhase.REGISTRATION


def test_start_shows_tables(capsys):
    session = make_session(players=["Ann", "Bob", "Cy", "Dee"])
    session.execute("start")
    out = capsys.readouterr().out
    assert "Round 1" in out
    assert "Table 1" in out


def test_rank_by_name_and_table_position(capsys):
    session = make_session(players=["Ann", "Bob", "Cy", "Dee"])
    session.execute("start")
    session.execute("rank 1 ann 1")

    ann = session.resolve_participant("Ann")
    assert session.tournament.current_round.tables[0].rank_of(ann.id) == 1
    assert "Ann finished #1" in capsys.readouterr().out

    session.execute("rank 1 Ann -")
    assert session.tournament.current_round.tables[0].rank_of(ann.id) is None


def test_bad_rank_is_reported(capsys):
    session = make_session(players=["Ann", "Bob", "Cy", "Dee"])
    session.execute("start")
    capsys.readouterr()
    session.execute("rank 1 Ann 9")
    assert "Error" in capsys.readouterr().out


def test_next_asks_before_skipping_unscored_seats(capsys):
    session = make_session(confirm_answer=False, players=["Ann", "Bob", "Cy", "Dee"])
    session.execute("start")
    session.execute("next")
    assert "Round not advanced" in capsys.readouterr().out
    assert session.tournament.current_round_number == 1

    session.confirm = lambda question: True
    session.execute("next")
    assert session.tournament.current_round_number == 2


def test_next_force_skips_confirmation():
    session = make_session(confirm_answer=False, players=["Ann", "Bob", "Cy"])
    session.execute("start")
    session.execute("next --force")
    assert session.tournament.current_round_number == 2


def test_bonus_commands(capsys):
    session = make_session(players=["Ann", "Bob", "Cy"])
    session.execute("bonus Ann 3")
    session.execute("bonus Ann -1")
    assert session.resolve_participant("Ann").bonus_points == 2
    session.execute("setbonus Ann 10")
    assert session.resolve_participant("Ann").bonus_points == 10
    session.execute("bonus Nobody 1")
    assert "No participant 'Nobody'" in capsys.readouterr().out


def test_reset_needs_confirmation():
    session = make_session(confirm_answer=False, players=["Ann", "Bob", "Cy"])
    session.execute("reset")
    assert len(session.tournament.participants) == 3

    session.confirm = lambda question: True
    session.execute("reset")
    assert session.tournament.participants == {}


def test_save_and_load(tmp_path):
    session = make_session(players=["Ann", "Bob", "Cy", "Dee", "Eve"])
    session.execute("start")
    target = tmp_path / "cup"
    session.execute(f"save {target}")
    saved = tmp_path / "cup.json"
    assert saved.exists()

    other = make_session()
    other.execute(f"load {saved}")
    assert other.tournament.to_dict() == session.tournament.to_dict()


def test_hype_without_generator(capsys):
    session = make_session(players=["Ann", "Bob", "Cy"])
    session.execute("start")
    session.execute("hype")
    assert "not configured" in capsys.readouterr().out


def test_hype_with_generator(capsys):
    def handler(request):
        body = {"candidates": [{"content": {"parts": [{"text": "Sparks will fly!"}]}}]}
        return httpx.Response(200, json=body)

    narrative = NarrativeClient(
        NarrativeConfig(api_key="k"),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        sleep=lambda seconds: None,
    )
    session = make_session(narrative=narrative, players=["Ann", "Bob", "Cy"])
    session.execute("start")
    session.execute("hype")
    assert "Sparks will fly!" in capsys.readouterr().out


def test_unknown_command_and_exit(capsys):
    session = make_session()
    assert session.execute("dance")
    assert "Unknown command: dance" in capsys.readouterr().out
    assert session.execute("")
    assert session.execute("/help rank")
    assert not session.execute("exit")


def test_usage_errors_do_not_escape():
    session = make_session(players=["Ann", "Bob", "Cy"])
    session.execute("start")
    assert session.execute("rank")
    assert session.execute("bonus")
    assert session.execute('add "unterminated')


def test_completer_knows_commands():
    completer = create_completer()
    assert "standings" in completer.options
    assert "help" in completer.options


def test_main_runs_scripted_commands(monkeypatch, capsys):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    exit_code = main(
        ["--seed", "1", "--rounds", "1", "-c", "add Ann Bob Cy Dee", "-c", "start", "-c", "standings"]
    )
    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Round 1" in out
    assert "Ann" in out


def test_main_reports_bad_save_file(tmp_path, capsys):
    exit_code = main(["--load", str(tmp_path / "missing.json"), "-c", "players"])
    assert exit_code == 1
    assert "Error" in capsys.readouterr().out


def test_verbose_flag_turns_on_debug_console_output(monkeypatch):
    import logging

    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    lgr = logging.getLogger("tableswiss.models.tournament.tournament")
    handler = lgr.handlers[0]
    saved = (lgr.level, handler.level)
    try:
        assert main(["--verbose", "-c", "players"]) == 0
        assert lgr.level == logging.DEBUG
        assert handler.level == logging.DEBUG
    finally:
        lgr.setLevel(saved[0])
        handler.setLevel(saved[1])


def test_loading_a_malformed_save_keeps_the_shell_running(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('{"participants": [{"name": "x"}]}', encoding="utf-8")
    session = make_session(players=["Ann", "Bob", "Cy"])

    assert session.execute(f"load {bad}")
    assert "Error" in capsys.readouterr().out
    assert [p.name for p in session.tournament.roster] == ["Ann", "Bob", "Cy"]


def test_loading_a_save_with_unknown_seats_is_refused(tmp_path, capsys):
    bad = tmp_path / "ghosts.json"
    bad.write_text(
        '{"phase": "active", "participants": [], "rounds": [{"round_number": 1, '
        '"tables": [{"id": "t", "name": "Table 1", "participant_ids": ["a", "b", "c"]}]}]}',
        encoding="utf-8",
    )
    session = make_session()

    assert session.execute(f"load {bad}")
    assert session.execute("round")
    out = capsys.readouterr().out
    assert "unknown ids" in out
    assert session.tournament.phase is TournamentPhase.REGISTRATION


def test_rank_rejects_round_zero(capsys):
    session = make_session(players=["Ann", "Bob", "Cy", "Dee"])
    session.execute("start")
    capsys.readouterr()

    session.execute("rank 1 Ann 1 --round 0")

    assert "Round 0 does not exist" in capsys.readouterr().out
    ann = session.resolve_participant("Ann")
    assert session.tournament.current_round.tables[0].rank_of(ann.id) is None
