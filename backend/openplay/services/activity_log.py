"""
Activity log: append-only audit trail of user-visible transitions.

Entries are inserted at the head so session.activity_log reads newest-first.
Nothing in the engine edits or removes an existing entry.
"""
from typing import Optional

from openplay.models.activity import ActivityDetails, ActivityLogEntry, ActivityType
from openplay.models.session import PlaySession


def make_entry(type: ActivityType, message: str, details: Optional[ActivityDetails] = None) -> ActivityLogEntry:
    return ActivityLogEntry(type=type, message=message, details=details)


def record(session: PlaySession, type: ActivityType, message: str, **details) -> ActivityLogEntry:
    """Prepend one entry to the session log and return it."""
    entry = make_entry(type, message, ActivityDetails(**details) if details else None)
    session.activity_log.insert(0, entry)
    return entry
