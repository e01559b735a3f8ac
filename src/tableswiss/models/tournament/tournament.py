"""Main Tournament class - orchestrates all tournament operations.

This is the primary interface for tournament management. It owns the roster,
the phase and the append-only list of rounds, and coordinates the
specialized managers to move from registration through the qualifying
rounds and the finals to completion.
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
from typing import Any, Dict, Iterable, List, Mapping, Optional

from tableswiss.constants import (
    FINALS_ROUND_NAME,
    MAX_TABLE_SIZE,
    MIN_PARTICIPANTS,
    MIN_TABLE_SIZE,
    ROUND_NAME_FORMAT,
)
from tableswiss.controllers.tournament import (
    ResultRecorder,
    RoundManager,
    StandingsCalculator,
    StandingsEntry,
)
from tableswiss.exceptions import (
    DuplicateParticipantException,
    IncompleteRoundException,
    InsufficientParticipantsException,
    InvalidParticipantDataException,
    InvalidRankException,
    ParticipantNotFoundException,
    TournamentStateException,
)
from tableswiss.models.enums import TournamentPhase
from tableswiss.models.participant import Participant
from tableswiss.models.tournament.round_data import RoundData
from tableswiss.models.tournament.tournament_config import TournamentConfig
from tableswiss.type_hints import ParticipantId
from tableswiss.utils import generate_id, setup_logger
from tableswiss.utils.validation import (
    validate_participant_name_strict,
    validate_rank_strict,
)

logger = setup_logger(__name__)


class Tournament:
    """Main tournament management class.

    This class coordinates all tournament operations through specialized managers:
    - RoundManager: allocates tables and pairs each round
    - ResultRecorder: validates and stores finish ranks
    - StandingsCalculator: turns ranks and bonuses into standings

    Phases run registration -> active -> completed. Only reset()
    goes back, and it discards everything but the configuration. Every
    operation validates before it changes anything, so a rejected call
    leaves the tournament as it was.
    """

    def __init__(
        self,
        name: str = "Untitled Tournament",
        config: Optional[TournamentConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize a new tournament in registration.

        Args
        ----
        name: Tournament name, ignored when config is given
        config: Round counts and pairing search limit
        rng: Random source for pairing and ids; seed it for reproducible runs
        """
        self.config = config if config is not None else TournamentConfig(name=name)
        self.phase = TournamentPhase.REGISTRATION

        # Participants, in registration order
        self.participants: Dict[ParticipantId, Participant] = {}

        self._rng = rng if rng is not None else random.Random()

        # Specialized managers
        self.round_manager = RoundManager(
            rng=self._rng, max_pairing_trials=self.config.max_pairing_trials
        )
        self.result_recorder = ResultRecorder()
        self.standings_calculator = StandingsCalculator()

    # ========== Properties ==========

    @property
    def name(self) -> str:
        """Get tournament name."""
        return self.config.name

    @name.setter
    def name(self, value: str) -> None:
        """Set tournament name."""
        self.config.name = value

    @property
    def roster(self) -> List[Participant]:
        """Participants in registration order."""
        return list(self.participants.values())

    @property
    def rounds(self) -> List[RoundData]:
        return self.round_manager.rounds

    @property
    def current_round_number(self) -> int:
        """1-based number of the round being played, 0 before the start."""
        return self.round_manager.current_round_number

    @property
    def current_round(self) -> Optional[RoundData]:
        return self.round_manager.current_round

    @property
    def is_current_round_complete(self) -> bool:
        current = self.current_round
        return current is not None and current.is_fully_scored

    @property
    def tournament_over(self) -> bool:
        """Is the tournament over?"""
        return self.phase is TournamentPhase.COMPLETED

    def get_round(self, round_number: int) -> RoundData:
        return self.round_manager.get_round(round_number)

    def round_name(self, round_number: int) -> str:
        """Display name of a round, "Round N" or "Finals"."""
        if 1 <= round_number <= len(self.rounds):
            if self.rounds[round_number - 1].is_final:
                return FINALS_ROUND_NAME
        elif round_number == self.config.total_rounds:
            return FINALS_ROUND_NAME
        return ROUND_NAME_FORMAT.format(number=round_number)

    def _require_phase(self, *phases: TournamentPhase, action: str) -> None:
        if self.phase not in phases:
            logger.warning(f"Rejected '{action}' during {self.phase.value}")
            raise TournamentStateException(
                f"Cannot {action} while the tournament is in {self.phase.value}"
            )

    # ========== Participant Management ==========

    def get_participant(self, participant_id: ParticipantId) -> Participant:
        """Look up a participant by id.

        Raises:
            ParticipantNotFoundException: If no such participant is registered
        """
        participant = self.participants.get(participant_id)
        if participant is None:
            raise ParticipantNotFoundException(
                f"No participant with id {participant_id}"
            )
        return participant

    def _new_participant_id(self) -> ParticipantId:
        participant_id = generate_id(self._rng)
        while participant_id in self.participants:
            participant_id = generate_id(self._rng)
        return participant_id

    def add_participant(
        self, name: str, participant_id: Optional[ParticipantId] = None
    ) -> Participant:
        """Register a participant.

        Args:
            name: Display name
            participant_id: Identifier to use; generated if omitted

        Returns:
            The new Participant

        Raises:
            TournamentStateException: If the tournament has started
            InvalidParticipantDataException: If the name is empty
            DuplicateParticipantException: If the id is already taken
        """
        self._require_phase(TournamentPhase.REGISTRATION, action="add participants")
        clean_name = validate_participant_name_strict(name)
        if participant_id is None:
            participant_id = self._new_participant_id()
        elif participant_id in self.participants:
            raise DuplicateParticipantException(
                f"Participant id {participant_id} is already registered"
            )

        participant = Participant(id=participant_id, name=clean_name)
        self.participants[participant.id] = participant
        logger.info(f"Added participant: {participant.name} ({participant.id})")
        return participant

    def add_participants(self, names: Iterable[str]) -> List[Participant]:
        """Register several participants at once; all or nothing."""
        self._require_phase(TournamentPhase.REGISTRATION, action="add participants")
        clean_names = [validate_participant_name_strict(name) for name in names]
        return [self.add_participant(name) for name in clean_names]

    def remove_participant(self, participant_id: ParticipantId) -> Participant:
        """Withdraw a participant before the tournament starts.

        Raises:
            TournamentStateException: If the tournament has started
            ParticipantNotFoundException: If no such participant is registered
        """
        self._require_phase(TournamentPhase.REGISTRATION, action="remove participants")
        participant = self.get_participant(participant_id)
        del self.participants[participant_id]
        logger.info(f"Removed participant: {participant.name} ({participant_id})")
        return participant

    def adjust_bonus(self, participant_id: ParticipantId, delta: int) -> int:
        """Add delta to a participant's bonus points.

        Returns:
            The participant's new bonus total
        """
        participant = self.get_participant(participant_id)
        delta = self._whole_points(delta)
        participant.bonus_points += delta
        logger.info(
            f"Bonus for {participant.name}: {delta:+d} (now {participant.bonus_points})"
        )
        return participant.bonus_points

    def set_bonus(self, participant_id: ParticipantId, points: int) -> int:
        """Overwrite a participant's bonus points."""
        participant = self.get_participant(participant_id)
        participant.bonus_points = self._whole_points(points)
        logger.info(f"Bonus for {participant.name} set to {participant.bonus_points}")
        return participant.bonus_points

    @staticmethod
    def _whole_points(value: Any) -> int:
        if isinstance(value, bool):
            raise InvalidParticipantDataException(f"Bonus must be a whole number: {value}")
        try:
            points = int(value)
        except (TypeError, ValueError, OverflowError):
            raise InvalidParticipantDataException(
                f"Bonus must be a whole number: {value}"
            ) from None
        if isinstance(value, float) and value != points:
            raise InvalidParticipantDataException(f"Bonus must be a whole number: {value}")
        return points

    # ========== Round Progression ==========

    def start(self) -> RoundData:
        """Close registration and pair round 1.

        Raises:
            TournamentStateException: If the tournament already started
            InsufficientParticipantsException: If fewer than three are registered
        """
        self._require_phase(TournamentPhase.REGISTRATION, action="start")
        if len(self.participants) < MIN_PARTICIPANTS:
            logger.warning(
                f"Need at least {MIN_PARTICIPANTS} participants to start, "
                f"have {len(self.participants)}"
            )
            raise InsufficientParticipantsException(
                len(self.participants), MIN_PARTICIPANTS
            )

        first_round = self.round_manager.create_qualifying_round(list(self.participants))
        self.phase = TournamentPhase.ACTIVE
        logger.info(
            f"Tournament '{self.name}' started with {len(self.participants)} participants"
        )
        return first_round

    def advance_round(self, force_if_incomplete: bool = False) -> Optional[RoundData]:
        """Close the current round and move on.

        After a qualifying round the next one is paired against the full
        history. After the last qualifying round the top of the standings
        is seated at the final table. After the finals the tournament is
        completed.

        Args:
            force_if_incomplete: Proceed even if some seats have no rank

        Returns:
            The newly created round, or None once the tournament completes

        Raises:
            TournamentStateException: If the tournament is not active
            IncompleteRoundException: If seats are unscored and not forced
        """
        self._require_phase(TournamentPhase.ACTIVE, action="advance the round")
        current = self.current_round

        if not current.is_fully_scored:
            if not force_if_incomplete:
                raise IncompleteRoundException(
                    current.round_number, current.unscored_seats
                )
            logger.warning(
                f"Closing round {current.round_number} with "
                f"{len(current.unscored_seats)} unscored seat(s)"
            )

        if current.is_final:
            self.phase = TournamentPhase.COMPLETED
            logger.info(f"Tournament '{self.name}' completed")
            return None

        if current.round_number < self.config.num_qualifying_rounds:
            return self.round_manager.create_qualifying_round(list(self.participants))

        finals_size = min(self.config.finals_size, len(self.participants))
        finalists = self.standings_calculator.top(self.roster, self.rounds, finals_size)
        return self.round_manager.create_finals_round([p.id for p in finalists])

    def record_rank(
        self,
        round_number: int,
        table_id: str,
        participant_id: ParticipantId,
        rank: Any,
    ) -> Optional[int]:
        """Record (or clear with rank=None) a finish rank.

        Any existing round may be edited; the finals line-up is not
        recomputed.

        Raises:
            TournamentStateException: During registration
            RoundNotFoundException: If the round does not exist
            TableNotFoundException: If the table is not in the round
            ParticipantNotFoundException: If the participant is not at the table
            InvalidRankException: If the rank is illegal for the table
        """
        self._require_phase(
            TournamentPhase.ACTIVE, TournamentPhase.COMPLETED, action="record ranks"
        )
        round_data = self.get_round(round_number)
        return self.result_recorder.record_rank(
            round_data, table_id, participant_id, rank
        )

    def record_table_ranks(
        self, round_number: int, table_id: str, ranks: Mapping[ParticipantId, Any]
    ) -> Dict[ParticipantId, int]:
        """Replace every rank of one table at once."""
        self._require_phase(
            TournamentPhase.ACTIVE, TournamentPhase.COMPLETED, action="record ranks"
        )
        round_data = self.get_round(round_number)
        return self.result_recorder.record_table_ranks(round_data, table_id, ranks)

    def standings(self) -> List[StandingsEntry]:
        """Current standings, highest total first."""
        return self.standings_calculator.compute_standings(self.roster, self.rounds)

    def reset(self) -> None:
        """Discard roster, rounds and bonuses and reopen registration."""
        self.participants = {}
        self.round_manager.clear()
        self.phase = TournamentPhase.REGISTRATION
        logger.info(f"Tournament '{self.name}' reset")

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "config": self.config.to_dict(),
            "phase": self.phase.value,
            "participants": [p.to_dict() for p in self.participants.values()],
            "rounds": [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], rng: Optional[random.Random] = None
    ) -> "Tournament":
        """Deserialize tournament from dictionary.

        Raises:
            TournamentStateException: If the data is malformed or inconsistent
        """
        try:
            tournament = cls(
                config=TournamentConfig.from_dict(data.get("config", {})), rng=rng
            )
            tournament.phase = TournamentPhase(
                data.get("phase", TournamentPhase.REGISTRATION.value)
            )
            for participant_data in data.get("participants", []):
                participant = Participant.from_dict(participant_data)
                if participant.id in tournament.participants:
                    raise TournamentStateException(
                        f"Saved tournament lists participant {participant.id} twice"
                    )
                tournament.participants[participant.id] = participant
            tournament.round_manager.rounds = [
                RoundData.from_dict(r) for r in data.get("rounds", [])
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise TournamentStateException(f"Malformed tournament data: {e!r}") from None

        if tournament.phase is not TournamentPhase.REGISTRATION and not tournament.rounds:
            raise TournamentStateException(
                f"Saved tournament is {tournament.phase.value} but has no rounds"
            )
        tournament._check_rounds()
        return tournament

    def _check_rounds(self) -> None:
        """Reject loaded rounds that do not fit the roster or the table rules."""
        for number, round_data in enumerate(self.rounds, start=1):
            if round_data.round_number != number:
                raise TournamentStateException(
                    f"Round {round_data.round_number} stored in position {number}"
                )
            for table in round_data.tables:
                if not MIN_TABLE_SIZE <= table.size <= MAX_TABLE_SIZE:
                    raise TournamentStateException(
                        f"{table.name} in round {number} seats {table.size} participants"
                    )
                unknown = [pid for pid in table.participant_ids if pid not in self.participants]
                if unknown:
                    raise TournamentStateException(
                        f"{table.name} in round {number} seats unknown ids {unknown}"
                    )
                for participant_id, rank in table.ranks.items():
                    if participant_id not in table:
                        raise TournamentStateException(
                            f"{table.name} in round {number} ranks unseated {participant_id}"
                        )
                    try:
                        validate_rank_strict(rank, table.size)
                    except InvalidRankException as e:
                        raise TournamentStateException(
                            f"{table.name} in round {number}: {e}"
                        ) from None
                if len(set(table.ranks.values())) != len(table.ranks):
                    raise TournamentStateException(
                        f"{table.name} in round {number} repeats a rank"
                    )
