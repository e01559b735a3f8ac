"""Interactive command-line interface for running a Table Swiss tournament.

Registration, pairing, rank entry, standings and the optional narrative
generator are all driven from one prompt with autocomplete.
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

import argparse
import json
import logging
import random
import shlex
import sys
from pathlib import Path
from typing import Callable, List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter, WordCompleter
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from tableswiss import __version__
from tableswiss.constants import (
    HYPE_FAILURE_MESSAGE,
    REPORT_FAILURE_MESSAGE,
    SAVE_FILE_EXTENSION,
)
from tableswiss.exceptions import (
    IncompleteRoundException,
    ParticipantNotFoundException,
    TableNotFoundException,
    TableSwissException,
)
from tableswiss.models.participant import Participant
from tableswiss.models.tournament import RoundData, Table, TournamentConfig
from tableswiss.models.tournament.tournament import Tournament
from tableswiss.narrative import (
    NarrativeClient,
    NarrativeConfig,
    NarrativeResult,
    build_final_report_request,
    build_round_hype_request,
)
from tableswiss.utils import set_console_level, setup_logger

logger = setup_logger(__name__)


# ANSI color codes for terminal output
class Colors:
    HEADER = "\033[95m"
    OKBLUE = "\033[94m"
    OKCYAN = "\033[96m"
    OKGREEN = "\033[92m"
    WARNING = "\033[93m"
    FAIL = "\033[91m"
    ENDC = "\033[0m"
    BOLD = "\033[1m"


# Command definitions with their arguments
COMMANDS = {
    "add": {
        "description": "Register participants (quote names with spaces)",
        "usage": "add <name> [<name> ...]",
        "options": {},
    },
    "remove": {
        "description": "Withdraw a participant before the start",
        "usage": "remove <participant>",
        "options": {},
    },
    "players": {
        "description": "List registered participants",
        "usage": "players",
        "options": {},
    },
    "start": {
        "description": "Close registration and pair round 1",
        "usage": "start",
        "options": {},
    },
    "round": {
        "description": "Show the tables of a round (current by default)",
        "usage": "round [<number>]",
        "options": {},
    },
    "rank": {
        "description": "Record a finish rank, '-' clears it",
        "usage": "rank <table> <participant> <rank> [--round N]",
        "options": {"--round": "Round to edit (default: current)"},
    },
    "bonus": {
        "description": "Add (or subtract) bonus points",
        "usage": "bonus <participant> <delta>",
        "options": {},
    },
    "setbonus": {
        "description": "Overwrite a participant's bonus points",
        "usage": "setbonus <participant> <points>",
        "options": {},
    },
    "next": {
        "description": "Close the current round and advance",
        "usage": "next [--force]",
        "options": {"--force": "Skip the unscored seats confirmation"},
    },
    "standings": {
        "description": "Show current standings",
        "usage": "standings",
        "options": {},
    },
    "hype": {
        "description": "Generate announcer text for the current round",
        "usage": "hype",
        "options": {},
    },
    "report": {
        "description": "Generate the final tournament report",
        "usage": "report",
        "options": {},
    },
    "save": {
        "description": "Save the tournament to a JSON file",
        "usage": "save <file>",
        "options": {},
    },
    "load": {
        "description": "Load a tournament from a JSON file",
        "usage": "load <file>",
        "options": {},
    },
    "reset": {
        "description": "Discard everything and reopen registration",
        "usage": "reset",
        "options": {},
    },
}


def print_banner():
    """Print the application banner."""
    banner = f"""
{Colors.OKBLUE}╔═══════════════════════════════════════════════════════════════╗
║                                                               ║
║                      TABLE SWISS  v{__version__:<10}                  ║
║                                                               ║
║           [Swiss tournaments at tables of three to five]      ║
║                                                               ║
╚═══════════════════════════════════════════════════════════════╝{Colors.ENDC}

Type {Colors.BOLD}help{Colors.ENDC} to see all available commands
Type {Colors.BOLD}exit{Colors.ENDC} or {Colors.BOLD}quit{Colors.ENDC} to leave
"""
    print(banner)


def print_commands_list():
    """Print list of all available commands."""
    print(f"\n{Colors.BOLD}Available Commands:{Colors.ENDC}\n")
    for cmd, info in COMMANDS.items():
        print(f"  {Colors.OKGREEN}{cmd:12}{Colors.ENDC} - {info['description']}")
    print()


def print_command_help(command: str):
    """Print detailed help for a specific command."""
    if command not in COMMANDS:
        print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
        print_commands_list()
        return

    cmd_info = COMMANDS[command]
    print(f"\n{Colors.BOLD}{Colors.OKBLUE}Command: {command}{Colors.ENDC}")
    print(f"{Colors.BOLD}Description:{Colors.ENDC} {cmd_info['description']}")
    print(f"{Colors.BOLD}Usage:{Colors.ENDC} {cmd_info['usage']}\n")

    if cmd_info["options"]:
        print(f"{Colors.BOLD}Options:{Colors.ENDC}")
        for option, description in cmd_info["options"].items():
            print(f"  {Colors.OKCYAN}{option:20}{Colors.ENDC} {description}")
    print()


def create_completer():
    """Create autocomplete completer for interactive mode."""
    completions = {}
    for cmd, info in COMMANDS.items():
        completions[cmd] = (
            WordCompleter(list(info["options"].keys())) if info["options"] else None
        )
    completions["help"] = WordCompleter(list(COMMANDS.keys()))
    completions["exit"] = None
    completions["quit"] = None
    return NestedCompleter.from_nested_dict(completions)


def create_rank_parser():
    """Create parser for the rank command."""
    parser = argparse.ArgumentParser(prog="rank", description="Record a finish rank")
    parser.add_argument("table", help="Table number, name or id")
    parser.add_argument("participant", help="Participant name or id")
    parser.add_argument("rank", help="Finish rank, '-' to clear")
    parser.add_argument("--round", type=int, dest="round_number")
    return parser


def create_next_parser():
    """Create parser for the next command."""
    parser = argparse.ArgumentParser(prog="next", description="Advance the round")
    parser.add_argument("--force", action="store_true")
    return parser


def ask_yes_no(question: str) -> bool:
    """Plain terminal confirmation."""
    answer = input(f"{Colors.WARNING}{question} [y/N]{Colors.ENDC} ").strip().lower()
    return answer in ("y", "yes")


class TournamentSession:
    """One tournament and the commands that drive it.

    ``confirm`` answers yes/no questions, ``narrative`` is optional and only
    used by the hype and report commands.
    """

    def __init__(
        self,
        tournament: Tournament,
        narrative: Optional[NarrativeClient] = None,
        confirm: Callable[[str], bool] = ask_yes_no,
    ):
        self.tournament = tournament
        self.narrative = narrative
        self.confirm = confirm

    # ========== Lookups ==========

    def resolve_participant(self, query: str) -> Participant:
        """Find a participant by id, or by name ignoring case."""
        if query in self.tournament.participants:
            return self.tournament.participants[query]
        matches = [
            p for p in self.tournament.roster if p.name.lower() == query.lower()
        ]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise ParticipantNotFoundException(
                f"'{query}' matches {len(matches)} participants, use the id"
            )
        raise ParticipantNotFoundException(f"No participant '{query}'")

    def resolve_table(self, round_data: RoundData, query: str) -> Table:
        """Find a table by position, name or id."""
        if query.isdigit() and 1 <= int(query) <= len(round_data.tables):
            return round_data.tables[int(query) - 1]
        for table in round_data.tables:
            if query in (table.id, table.name) or query.lower() == table.name.lower():
                return table
        raise TableNotFoundException(
            f"No table '{query}' in round {round_data.round_number}"
        )

    # ========== Output ==========

    def show_round(self, round_data: RoundData) -> None:
        title = self.tournament.round_name(round_data.round_number)
        print(f"\n{Colors.BOLD}{title}{Colors.ENDC}")
        for table in round_data.tables:
            print(f"  {Colors.OKCYAN}{table.name}{Colors.ENDC} [{table.id}]")
            for pid in table.participant_ids:
                rank = table.rank_of(pid)
                shown = f"#{rank}" if rank is not None else "-"
                print(f"    {self.tournament.participants[pid].name:24} {shown}")
        print()

    def show_standings(self) -> None:
        header = f"{'Rank':6}{'Player':24}{'Base':>6}{'Extra':>7}{'Total':>7}"
        print(f"\n{Colors.BOLD}{header}{Colors.ENDC}")
        for entry in self.tournament.standings():
            extra = f"{entry.bonus_points:+d}" if entry.bonus_points else "-"
            print(
                f"#{entry.position:<5}{entry.name:24}"
                f"{entry.base_points:>6}{extra:>7}{entry.total_score:>7}"
            )
        print()

    def show_players(self) -> None:
        roster = self.tournament.roster
        print(f"\nRegistered Players ({len(roster)})")
        for participant in roster:
            print(f"  {participant.id}  {participant.name}")
        print()

    def show_narrative(self, result: NarrativeResult) -> None:
        colour = Colors.OKGREEN if result.ok else Colors.FAIL
        print(f"\n{colour}{result.text}{Colors.ENDC}")
        if result.sources:
            print(f"\n{Colors.BOLD}Sources:{Colors.ENDC}")
            for source in result.sources:
                print(f"  - {source.title or 'Source Link'}: {source.uri}")
        print()

    # ========== Commands ==========

    def cmd_add(self, args: List[str]) -> None:
        added = self.tournament.add_participants(args)
        print(f"Added {len(added)} participant(s)")

    def cmd_remove(self, args: List[str]) -> None:
        participant = self.resolve_participant(" ".join(args))
        self.tournament.remove_participant(participant.id)
        print(f"Removed {participant.name}")

    def cmd_players(self, args: List[str]) -> None:
        self.show_players()

    def cmd_start(self, args: List[str]) -> None:
        self.show_round(self.tournament.start())

    def cmd_round(self, args: List[str]) -> None:
        number = int(args[0]) if args else self.tournament.current_round_number
        self.show_round(self.tournament.get_round(number))

    def cmd_rank(self, args: List[str]) -> None:
        parsed = create_rank_parser().parse_args(args)
        round_number = parsed.round_number
        if round_number is None:
            round_number = self.tournament.current_round_number
        round_data = self.tournament.get_round(round_number)
        table = self.resolve_table(round_data, parsed.table)
        participant = self.resolve_participant(parsed.participant)
        rank = None if parsed.rank == "-" else parsed.rank
        stored = self.tournament.record_rank(
            round_number, table.id, participant.id, rank
        )
        if stored is None:
            print(f"Cleared rank for {participant.name}")
        else:
            print(f"{participant.name} finished #{stored} at {table.name}")

    def cmd_bonus(self, args: List[str]) -> None:
        participant = self.resolve_participant(args[0])
        total = self.tournament.adjust_bonus(participant.id, args[1])
        print(f"{participant.name} bonus: {total}")

    def cmd_setbonus(self, args: List[str]) -> None:
        participant = self.resolve_participant(args[0])
        total = self.tournament.set_bonus(participant.id, args[1])
        print(f"{participant.name} bonus: {total}")

    def cmd_next(self, args: List[str]) -> None:
        parsed = create_next_parser().parse_args(args)
        try:
            new_round = self.tournament.advance_round(force_if_incomplete=parsed.force)
        except IncompleteRoundException as e:
            if not self.confirm(
                f"WARNING: {len(e.unscored_seats)} seat(s) have not been scored. "
                "Proceed anyway?"
            ):
                print("Round not advanced")
                return
            new_round = self.tournament.advance_round(force_if_incomplete=True)

        if new_round is None:
            print(f"\n{Colors.OKGREEN}{Colors.BOLD}Tournament Complete!{Colors.ENDC}")
            self.show_standings()
        else:
            self.show_round(new_round)

    def cmd_standings(self, args: List[str]) -> None:
        self.show_standings()

    def cmd_hype(self, args: List[str]) -> None:
        if self.narrative is None:
            print(f"{Colors.WARNING}Narrative generator not configured{Colors.ENDC}")
            return
        request = build_round_hype_request(self.tournament)
        self.show_narrative(
            self.narrative.generate(request, failure_message=HYPE_FAILURE_MESSAGE)
        )

    def cmd_report(self, args: List[str]) -> None:
        if self.narrative is None:
            print(f"{Colors.WARNING}Narrative generator not configured{Colors.ENDC}")
            return
        request = build_final_report_request(self.tournament)
        self.show_narrative(
            self.narrative.generate(request, failure_message=REPORT_FAILURE_MESSAGE)
        )

    def cmd_save(self, args: List[str]) -> None:
        path = Path(args[0])
        if not path.suffix:
            path = path.with_suffix(SAVE_FILE_EXTENSION)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.tournament.to_dict(), f, indent=2)
        logger.info(f"Saved tournament to {path}")
        print(f"Saved to {path}")

    def cmd_load(self, args: List[str]) -> None:
        path = Path(args[0])
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        self.tournament = Tournament.from_dict(data, rng=self.tournament._rng)
        logger.info(f"Loaded tournament from {path}")
        print(f"Loaded '{self.tournament.name}' ({self.tournament.phase.value})")

    def cmd_reset(self, args: List[str]) -> None:
        if not self.confirm("Reset the tournament? All players and rounds are lost."):
            print("Reset cancelled")
            return
        self.tournament.reset()
        print("Tournament reset")

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the user wants to quit."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            return True
        if not parts:
            return True

        command, args = parts[0].lstrip("/").lower(), parts[1:]
        if command in ("exit", "quit", "q"):
            return False
        if command in ("help", "?"):
            if args:
                print_command_help(args[0].lstrip("/"))
            else:
                print_commands_list()
            return True
        if command not in COMMANDS:
            print(f"{Colors.FAIL}Unknown command: {command}{Colors.ENDC}")
            print(f"Type {Colors.BOLD}help{Colors.ENDC} to see available commands")
            return True

        handler = getattr(self, f"cmd_{command}")
        try:
            handler(args)
        except SystemExit:
            # argparse calls sys.exit on error, catch it
            pass
        except IndexError:
            print(f"{Colors.FAIL}Usage: {COMMANDS[command]['usage']}{Colors.ENDC}")
        except (TableSwissException, ValueError, OSError) as e:
            print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
            logger.debug("Command '%s' failed", command, exc_info=True)
        return True


def run_interactive_mode(session: TournamentSession) -> int:
    """Run in interactive mode with autocomplete."""
    print_banner()

    style = Style.from_dict(
        {
            "prompt": "#00aa00 bold",
        }
    )
    prompt_session = PromptSession(
        completer=create_completer(),
        history=InMemoryHistory(),
        style=style,
    )

    def confirm(question: str) -> bool:
        answer = prompt_session.prompt(f"{question} [y/N] ", completer=None)
        return answer.strip().lower() in ("y", "yes")

    session.confirm = confirm

    while True:
        try:
            phase = session.tournament.phase.value
            user_input = prompt_session.prompt(f"table-swiss ({phase})> ").strip()
            if not session.execute(user_input):
                print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
                break
        except KeyboardInterrupt:
            print(f"\n{Colors.WARNING}Use 'exit' or 'quit' to leave{Colors.ENDC}")
        except EOFError:
            print(f"\n{Colors.OKGREEN}Goodbye!{Colors.ENDC}\n")
            break
    return 0


def create_main_parser():
    """Create main argument parser."""
    parser = argparse.ArgumentParser(
        prog="table-swiss",
        description="Run a Swiss tournament played at tables of three to five",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode
  table-swiss

  # Reproducible pairings
  table-swiss --seed 42

  # Continue a saved tournament
  table-swiss --load club-night.json

  # Scripted run
  table-swiss -c "add Ann Bob Cy Dee" -c start -c standings
        """,
    )
    parser.add_argument("--name", default="Untitled Tournament", help="Tournament name")
    parser.add_argument(
        "--rounds", type=int, default=None, help="Qualifying rounds before the finals"
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible pairings")
    parser.add_argument("--load", help="Saved tournament to open")
    parser.add_argument("--api-key", help="Narrative generator API key")
    parser.add_argument("--model", help="Narrative generator model")
    parser.add_argument(
        "--command",
        "-c",
        action="append",
        default=[],
        help="Run a command and exit (repeatable)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=__version__)
    return parser


def build_session(args: argparse.Namespace) -> TournamentSession:
    """Create the tournament session described by command line arguments."""
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    if args.load:
        with open(args.load, "r", encoding="utf-8") as f:
            tournament = Tournament.from_dict(json.load(f), rng=rng)
    else:
        config = TournamentConfig(name=args.name)
        if args.rounds is not None:
            config = TournamentConfig(name=args.name, num_qualifying_rounds=args.rounds)
        tournament = Tournament(config=config, rng=rng)

    narrative = NarrativeClient(
        NarrativeConfig.from_env(api_key=args.api_key, model=args.model)
    )
    return TournamentSession(tournament, narrative=narrative)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for table-swiss CLI."""
    args = create_main_parser().parse_args(argv)
    if args.verbose:
        set_console_level(logging.DEBUG)

    try:
        session = build_session(args)
    except (TableSwissException, OSError, ValueError) as e:
        print(f"{Colors.FAIL}Error: {e}{Colors.ENDC}")
        return 1

    try:
        if args.command:
            for line in args.command:
                if not session.execute(line):
                    break
            return 0
        return run_interactive_mode(session)
    finally:
        if session.narrative is not None:
            session.narrative.close()


if __name__ == "__main__":
    sys.exit(main())
