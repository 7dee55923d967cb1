"""
Court naming helpers.

Courts are named "Court N" by default; operators may rename them freely.
A rename that is blank after trimming is discarded so a court never ends up
without a label.
"""
from typing import List, Optional


def default_court_name(court_number: int) -> str:
    """Default label for a 1-based court number."""
    return f"Court {court_number}"


def default_court_names(court_count: int) -> List[str]:
    return [default_court_name(n) for n in range(1, court_count + 1)]


def clean_court_name(name: Optional[str]) -> Optional[str]:
    """
    Normalize a user-entered court name.

    - None or whitespace-only -> None (caller keeps the previous name)
    - Anything else -> stripped string
    """
    if name is None:
        return None
    cleaned = str(name).strip()
    return cleaned or None
