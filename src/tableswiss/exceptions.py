"""Exceptions for use in Table Swiss"""

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

from typing import List, Tuple


# ========== Base Application Exception ==========


class TableSwissException(Exception):
    """Base exception for all Table Swiss errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(TableSwissException):
    """Base exception for pairing-related errors."""

    pass


class InsufficientParticipantsException(PairingException):
    """Raised when there are too few participants to seat a single table."""

    def __init__(self, participant_count: int, minimum: int = 3):
        self.participant_count = participant_count
        self.minimum = minimum
        super().__init__(
            f"Need at least {minimum} participants, got {participant_count}"
        )


class StructureMismatchException(PairingException):
    """Raised when a table structure does not add up to the participants given."""

    pass


# ========== Tournament Exceptions ==========


class TournamentException(TableSwissException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


class TableNotFoundException(TournamentException):
    """Raised when a requested table does not exist in a round."""

    pass


class IncompleteRoundException(TournamentException):
    """Raised when advancing past a round that still has unscored seats.

    Not fatal: the caller may confirm and retry with ``force_if_incomplete``.

    Attributes
    ----------
    round_number : int
        The round that is not fully scored.
    unscored_seats : list of tuple of str
        ``(table_id, participant_id)`` for every seat without a rank.
    """

    def __init__(self, round_number: int, unscored_seats: List[Tuple[str, str]]):
        self.round_number = round_number
        self.unscored_seats = list(unscored_seats)
        super().__init__(
            f"Round {round_number} has {len(self.unscored_seats)} unscored seat(s)"
        )


# ========== Participant Exceptions ==========


class ParticipantException(TableSwissException):
    """Base exception for participant-related errors."""

    pass


class ParticipantNotFoundException(ParticipantException):
    """Raised when a requested participant cannot be found."""

    pass


class DuplicateParticipantException(ParticipantException):
    """Raised when attempting to add a participant that already exists."""

    pass


class InvalidParticipantDataException(ParticipantException):
    """Raised when participant data is invalid or incomplete."""

    pass


# ========== Result Exceptions ==========


class ResultException(TableSwissException):
    """Base exception for result recording errors."""

    pass


class InvalidRankException(ResultException):
    """Raised when a rank is out of range for its table or already taken."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(TableSwissException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


# ========== Narrative Exceptions ==========


class NarrativeException(TableSwissException):
    """Base exception for narrative generator errors."""

    pass


class NarrativeAPIException(NarrativeException):
    """Raised when the narrative generator API returns an unusable response.

    Attributes
    ----------
    status_code : int or None
        HTTP status of the failing response, None for transport errors.
    retryable : bool
        Whether another attempt may succeed.
    """

    def __init__(self, message: str, status_code=None, retryable: bool = False):
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(message)
