"""
Command plumbing for the session engine.

Every engine command runs against a deep copy of the session. If the
command raises CommandRejected the copy is dropped and the caller gets the
original session back, so a command either applies its whole delta
(courts, players, queue, log) or nothing at all.
"""
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional

from openplay.models.session import PlaySession

logger = logging.getLogger(__name__)

NO_ACTIVE_SESSION = "no active session"


class CommandRejected(Exception):
    """A workflow precondition did not hold; state is left unchanged."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


@dataclass
class CommandResult:
    session: Optional[PlaySession]
    applied: bool
    reason: Optional[str] = None


def run_command(fn: Callable, session: Optional[PlaySession], *args, **kwargs) -> CommandResult:
    """Run an engine command and report whether it applied.

    Accepts either a @command-decorated function or its raw implementation.
    """
    impl = getattr(fn, "__wrapped__", fn)
    if session is None or not session.is_active:
        logger.debug("%s rejected: %s", impl.__name__, NO_ACTIVE_SESSION)
        return CommandResult(session=session, applied=False, reason=NO_ACTIVE_SESSION)

    working = session.model_copy(deep=True)
    try:
        impl(working, *args, **kwargs)
    except CommandRejected as exc:
        logger.debug("%s rejected: %s", impl.__name__, exc.reason)
        return CommandResult(session=session, applied=False, reason=exc.reason)
    return CommandResult(session=working, applied=True)


def command(fn: Callable) -> Callable:
    """Turn an in-place mutator into a Session -> Session command with no-op rejection."""

    @wraps(fn)
    def wrapper(session: Optional[PlaySession], *args, **kwargs) -> Optional[PlaySession]:
        return run_command(fn, session, *args, **kwargs).session

    return wrapper
