"""
Queue Manager: ordered wait list of player ids.

Index 0 plays next. Ids are unique within the queue. Every operation here
mutates the list in place and reports whether anything changed, so callers
can decide whether the move is worth logging (or should be rejected).
"""
import re
from typing import Iterable, List, Optional, Tuple

from openplay.models.player import Player

_NAME_SEPARATORS = re.compile(r"[\n,;]+")


def enqueue(queue: List[str], player_id: str, at_front: bool = False) -> bool:
    """Append to the tail (or insert at the head). No-op if already queued."""
    if player_id in queue:
        return False
    if at_front:
        queue.insert(0, player_id)
    else:
        queue.append(player_id)
    return True


def dequeue(queue: List[str], player_id: str) -> bool:
    if player_id not in queue:
        return False
    queue.remove(player_id)
    return True


def insert_at(queue: List[str], player_id: str, index: int) -> int:
    """Place player_id at index (clamped to the queue length), removing any existing entry first.

    Returns the index the player ended up at.
    """
    if player_id in queue:
        queue.remove(player_id)
    index = max(0, min(index, len(queue)))
    queue.insert(index, player_id)
    return index


def extend_tail(queue: List[str], player_ids: Iterable[str]) -> None:
    for pid in player_ids:
        enqueue(queue, pid)


def prepend(queue: List[str], player_ids: List[str]) -> None:
    """Put player_ids at the head, keeping their relative order."""
    for pid in reversed(player_ids):
        insert_at(queue, pid, 0)


def move(queue: List[str], player_id: str, offset: int) -> Optional[int]:
    """Swap player_id with its neighbour offset places away (-1 = toward head).

    Returns the new index, or None when the player is absent or already at
    the boundary.
    """
    if player_id not in queue:
        return None
    index = queue.index(player_id)
    new_index = index + offset
    if new_index < 0 or new_index >= len(queue):
        return None
    queue[index], queue[new_index] = queue[new_index], queue[index]
    return new_index


def move_to_front(queue: List[str], player_id: str) -> bool:
    if player_id not in queue or queue[0] == player_id:
        return False
    queue.remove(player_id)
    queue.insert(0, player_id)
    return True


def normalize_name(name: str) -> str:
    return name.strip().lower()


def is_name_duplicate(players: Iterable[Player], name: str) -> bool:
    """Case-insensitive, trimmed comparison against every known player (active or not)."""
    wanted = normalize_name(name)
    return any(normalize_name(p.name) == wanted for p in players)


def parse_names(text: str) -> List[str]:
    """Split a pasted roster on newlines, commas and semicolons."""
    return [n.strip() for n in _NAME_SEPARATORS.split(text or "") if n.strip()]


def split_new_names(players: Iterable[Player], names: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Partition names into (new, duplicates).

    A name is a duplicate if it matches an existing player or an earlier
    name in the same batch. Submitted order is preserved.
    """
    players = list(players)
    new_names: List[str] = []
    duplicates: List[str] = []
    seen = set()
    for name in names:
        key = normalize_name(name)
        if not key:
            continue
        if is_name_duplicate(players, name):
            duplicates.append(name.strip())
        elif key not in seen:
            seen.add(key)
            new_names.append(name.strip())
    return new_names, duplicates
