"""Shared utilities for Table Swiss."""

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
from typing import Optional

from tableswiss.constants import ID_ALPHABET, ID_LENGTH
from tableswiss.utils.logging import set_console_level, setup_logger


def generate_id(rng: Optional[random.Random] = None) -> str:
    """Generate a short random identifier.

    Pass a seeded ``rng`` to get reproducible identifiers.
    """
    source = rng if rng is not None else random.SystemRandom()
    return "".join(source.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


__all__ = ["generate_id", "set_console_level", "setup_logger"]
