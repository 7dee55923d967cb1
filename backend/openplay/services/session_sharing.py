"""
Portable share tokens for read-only viewers.

A token is the JSON snapshot, zlib-compressed and encoded as URL-safe
base64 with the padding stripped, so it can ride in a query string.
"""
import base64
import json
import logging
import zlib
from typing import Optional

from pydantic import ValidationError

from openplay.models.session import PlaySession

logger = logging.getLogger(__name__)

# Upper bound on an inflated snapshot; tokens arrive unauthenticated
MAX_SNAPSHOT_BYTES = 5 * 1024 * 1024


def snapshot(session: PlaySession) -> dict:
    """Plain JSON-able document: ISO-8601 timestamps, ordered lists."""
    return session.model_dump(mode="json")


def encode_session(session: PlaySession) -> str:
    payload = json.dumps(snapshot(session), separators=(",", ":")).encode("utf-8")
    encoded = base64.urlsafe_b64encode(zlib.compress(payload)).decode("ascii")
    return encoded.rstrip("=")


def decode_session(token: str) -> Optional[PlaySession]:
    if not token:
        return None
    padded = token + "=" * (-len(token) % 4)
    try:
        raw = _inflate(base64.urlsafe_b64decode(padded.encode("ascii")))
        return PlaySession.model_validate(json.loads(raw))
    except (ValueError, zlib.error, ValidationError) as e:
        logger.error(f"Failed to decode shared session: {e}")
        return None


def _inflate(data: bytes) -> bytes:
    """Decompress at most MAX_SNAPSHOT_BYTES; anything larger or truncated is rejected."""
    inflater = zlib.decompressobj()
    raw = inflater.decompress(data, MAX_SNAPSHOT_BYTES)
    if inflater.unconsumed_tail or not inflater.eof:
        raise ValueError(f"snapshot is truncated or larger than {MAX_SNAPSHOT_BYTES} bytes")
    return raw
