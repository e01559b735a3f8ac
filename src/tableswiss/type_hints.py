"""Type hints used in Table Swiss."""

from typing import Dict, FrozenSet, List, Optional, Tuple

# Finish rank within a table, 1..table size
Rank = int
MaybeRank = Optional[int]

# Stable participant identifier
ParticipantId = str
TableId = str

# Participant ids in seating order
Seating = Tuple[ParticipantId, ...]
# participant id -> rank
TableRanks = Dict[ParticipantId, Rank]
# Unordered pair of participants
Pair = FrozenSet[ParticipantId]
# Table sizes in slicing order
Slots = List[int]
# (table id, participant id) for one seat
Seat = Tuple[TableId, ParticipantId]

#  LocalWords:  Slots
