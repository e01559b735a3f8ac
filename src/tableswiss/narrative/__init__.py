"""Narrative generator adapter.

Optional flavour text for rounds and finished tournaments. Nothing here
changes tournament state.
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

from tableswiss.narrative.client import NarrativeClient, NarrativeConfig
from tableswiss.narrative.models import (
    NarrativeRequest,
    NarrativeResult,
    NarrativeSource,
)
from tableswiss.narrative.prompts import (
    build_final_report_request,
    build_round_hype_request,
)

__all__ = [
    "NarrativeClient",
    "NarrativeConfig",
    "NarrativeRequest",
    "NarrativeResult",
    "NarrativeSource",
    "build_final_report_request",
    "build_round_hype_request",
]
