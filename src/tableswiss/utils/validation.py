"""Validation utilities for Table Swiss.

This module provides reusable validation functions with consistent error handling.
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

from typing import Any, List, Optional

from tableswiss.exceptions import (
    InvalidParticipantDataException,
    InvalidRankException,
)

MAX_NAME_LENGTH = 100


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Participant Name Validation ==========


def validate_participant_name(name: Optional[str]) -> ValidationResult:
    """Validate a participant display name.

    Surrounding whitespace is stripped and inner runs of whitespace collapse
    to a single space.

    Args:
        name: Name to validate

    Returns:
        ValidationResult with the cleaned name
    """
    if name is None or not str(name).strip():
        return ValidationResult(
            is_valid=False,
            error_message="Participant name is required",
        )

    cleaned = " ".join(str(name).split())
    if len(cleaned) > MAX_NAME_LENGTH:
        return ValidationResult(
            is_valid=False,
            error_message=f"Participant name longer than {MAX_NAME_LENGTH} characters",
        )
    return ValidationResult(is_valid=True, sanitized_value=cleaned)


def validate_participant_name_strict(name: Optional[str]) -> str:
    """Validate a name and return it cleaned, or raise.

    Raises:
        InvalidParticipantDataException: If the name is invalid
    """
    result = validate_participant_name(name)
    if not result.is_valid:
        raise InvalidParticipantDataException(result.error_message)
    return result.sanitized_value


def parse_participant_names(text: str) -> List[str]:
    """Split a block of text into participant names, one per line.

    Blank lines are dropped.

    Example:
        >>> parse_participant_names("Alice\\n\\n  Bob \\nCharlie")
        ['Alice', 'Bob', 'Charlie']
    """
    names = []
    for line in text.splitlines():
        result = validate_participant_name(line)
        if result:
            names.append(result.sanitized_value)
    return names


# ========== Rank Validation ==========


def validate_rank(rank: Any, table_size: int) -> ValidationResult:
    """Validate a finish rank for a table of ``table_size`` seats.

    ``None`` is valid and means the seat is unscored.

    Args:
        rank: Rank to validate
        table_size: Number of participants at the table

    Returns:
        ValidationResult with the rank as ``int`` (or None)
    """
    if rank is None:
        return ValidationResult(is_valid=True, sanitized_value=None)

    if isinstance(rank, bool):
        return ValidationResult(
            is_valid=False, error_message=f"Rank must be a whole number: {rank}"
        )
    try:
        rank_int = int(rank)
    except (ValueError, TypeError, OverflowError):
        return ValidationResult(
            is_valid=False,
            error_message=f"Rank must be a whole number: {rank}",
        )
    if isinstance(rank, float) and rank != rank_int:
        return ValidationResult(
            is_valid=False,
            error_message=f"Rank must be a whole number: {rank}",
        )

    if rank_int < 1 or rank_int > table_size:
        return ValidationResult(
            is_valid=False,
            error_message=f"Rank must be between 1 and {table_size}: {rank_int}",
        )

    return ValidationResult(is_valid=True, sanitized_value=rank_int)


def validate_rank_strict(rank: Any, table_size: int) -> Optional[int]:
    """Validate a rank and return it as ``int`` (or None), or raise.

    Raises:
        InvalidRankException: If rank is invalid
    """
    result = validate_rank(rank, table_size)
    if not result.is_valid:
        raise InvalidRankException(result.error_message)
    return result.sanitized_value
