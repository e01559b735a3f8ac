"""Request and result types for the narrative generator."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class NarrativeRequest:
    """What to ask the narrative generator for.

    Attributes
    ----------
    prompt : str
        Context and instructions for the text to write.
    system_instruction : str or None
        Persona the generator should adopt.
    use_search : bool
        Allow the generator to ground its text with web search results.
    """

    prompt: str
    system_instruction: Optional[str] = None
    use_search: bool = False

    def to_payload(self) -> Dict[str, Any]:
        """Build the generateContent request body."""
        payload: Dict[str, Any] = {
            "contents": [{"parts": [{"text": self.prompt}]}],
            "tools": [{"google_search": {}}] if self.use_search else [],
        }
        if self.system_instruction:
            payload["systemInstruction"] = {
                "parts": [{"text": self.system_instruction}]
            }
        return payload


@dataclass(frozen=True)
class NarrativeSource:
    """A web page cited by generated text."""

    uri: str
    title: str


@dataclass
class NarrativeResult:
    """Generated text, or a user-facing failure message when ``ok`` is False."""

    text: str
    sources: List[NarrativeSource] = field(default_factory=list)
    ok: bool = True
