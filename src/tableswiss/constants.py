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

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Finish rank -> points
RANK_POINTS = {
    1: 7,
    2: 4,
    3: 3,
    4: 1,
    5: 0,
}
UNRANKED_POINTS = 0

# Table sizes
MIN_TABLE_SIZE = 3
STANDARD_TABLE_SIZE = 4
MAX_TABLE_SIZE = 5
MIN_PARTICIPANTS = MIN_TABLE_SIZE

# Round progression
DEFAULT_QUALIFYING_ROUNDS = 3
DEFAULT_FINALS_SIZE = 4

# Anti-repeat search limit (swap trials per round)
DEFAULT_MAX_PAIRING_TRIALS = 500

# Labels
TABLE_NAME_FORMAT = "Table {position}"
FINAL_TABLE_NAME = "Final Table"
ROUND_NAME_FORMAT = "Round {number}"
FINALS_ROUND_NAME = "Finals"

# Generated identifiers
ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
ID_LENGTH = 9

# Tournament phases
PHASE_REGISTRATION = "registration"
PHASE_ACTIVE = "active"
PHASE_COMPLETED = "completed"

# Narrative generator
NARRATIVE_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
NARRATIVE_MODEL = "gemini-2.5-flash-preview-09-2025"
NARRATIVE_API_KEY_ENV = "GEMINI_API_KEY"
NARRATIVE_MODEL_ENV = "TABLESWISS_NARRATIVE_MODEL"
NARRATIVE_TIMEOUT = 30.0
NARRATIVE_MAX_RETRIES = 5
NARRATIVE_BACKOFF_BASE = 1.0  # seconds, doubled per attempt
NARRATIVE_BACKOFF_JITTER = 1.0  # seconds, uniform random added to each delay
NARRATIVE_HYPE_STANDINGS = 5

HYPE_FAILURE_MESSAGE = "Failed to generate hype text. Please check your Gemini API key."
REPORT_FAILURE_MESSAGE = (
    "Failed to generate the final tournament report. "
    "Please check the log for details."
)

# Logging
LOG_DIR_ENV = "TABLESWISS_LOG_DIR"
LOG_LEVEL_ENV = "TABLESWISS_LOG_LEVEL"
LOG_FILE_NAME = "table-swiss.log"
