import secrets
import uuid

SHARE_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no 0/O, 1/I
SHARE_CODE_LENGTH = 6


def new_id() -> str:
    return str(uuid.uuid4())


def generate_share_code() -> str:
    """Short human-readable code used to look up a shared session."""
    return "".join(secrets.choice(SHARE_CODE_ALPHABET) for _ in range(SHARE_CODE_LENGTH))
