"""Prompt builders for round hype and the final tournament report.

Builders only read the tournament; they never change it.
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

import json

from tableswiss.constants import NARRATIVE_HYPE_STANDINGS
from tableswiss.exceptions import TournamentStateException
from tableswiss.models.tournament.tournament import Tournament
from tableswiss.narrative.models import NarrativeRequest

HYPE_PERSONA = "Act as a highly dramatic, enthusiastic tournament commentator."
REPORT_PERSONA = (
    "Act as a professional, authoritative sports commentator "
    "for a major competitive gaming league."
)


def describe_tables(tournament: Tournament) -> str:
    """One line per table of the current round: name, size and who sits there."""
    current = tournament.current_round
    if current is None:
        return ""
    descriptions = []
    for position, table in enumerate(current.tables, start=1):
        names = ", ".join(
            tournament.participants[pid].name for pid in table.participant_ids
        )
        descriptions.append(f"Table {position} ({table.size} players): {names}")
    return "; ".join(descriptions)


def build_round_hype_request(tournament: Tournament) -> NarrativeRequest:
    """Ask for a short announcer blurb opening the current round.

    Raises:
        TournamentStateException: If no round has been paired yet
    """
    current = tournament.current_round
    if current is None:
        raise TournamentStateException("No round to hype before the tournament starts")

    leaders = [
        {"name": entry.name, "score": entry.total_score}
        for entry in tournament.standings()[:NARRATIVE_HYPE_STANDINGS]
    ]
    prompt = (
        "You are a dramatic sports announcer. Generate a short, exciting, single "
        "paragraph blurb (max 4 sentences) for the start of "
        f"{tournament.round_name(current.round_number)} in a board game tournament.\n"
        f"Current top {NARRATIVE_HYPE_STANDINGS} players and scores: "
        f"{json.dumps(leaders)}.\n"
        f"Current pairings: {describe_tables(tournament)}.\n"
        "Focus on rivalries, the tension of the current round, and the top "
        "players' pursuit of victory. Do NOT include any citations."
    )
    return NarrativeRequest(prompt=prompt, system_instruction=HYPE_PERSONA)


def build_final_report_request(tournament: Tournament) -> NarrativeRequest:
    """Ask for a grounded two-paragraph report on a finished tournament.

    Raises:
        TournamentStateException: If the tournament is not completed
    """
    if not tournament.tournament_over:
        raise TournamentStateException("The final report needs a completed tournament")

    standings = tournament.standings()
    winner = standings[0]
    standings_text = ", ".join(
        f"#{entry.position}: {entry.name} ({entry.total_score} pts)"
        for entry in standings
    )
    prompt = (
        "Write a compelling, analytical sports report (max 2 paragraphs) "
        f"summarizing a {len(tournament.rounds)}-round board game tournament "
        "that just concluded.\n"
        f"The champion is {winner.name} with {winner.total_score} total points.\n"
        f"Full final standings: {standings_text}.\n"
        "Mention the winner's dominance or resilience. Include a fun comparison "
        "or context to a major, current professional sports event or championship "
        "(e.g., Chess, e-sports, poker, etc.) using grounded search results."
    )
    return NarrativeRequest(
        prompt=prompt, system_instruction=REPORT_PERSONA, use_search=True
    )
