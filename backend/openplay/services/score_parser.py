"""
Minimal score parser for single-game rally scores.

Supports formats like:
  "11-7"                       → team1 11, team2 7
  "11 - 7" / "11:7"            → separator variants
  {"team1": 11, "team2": 7}    → structured form
  {"display": "11-7"}          → extracts display string first

Returns None on parse failure (non-fatal; the game ends without a score).
"""
from __future__ import annotations

import re
from typing import Any, Optional

from pydantic import ValidationError

from openplay.models.game import GameScore

_SCORE_RE = re.compile(r"^\s*(\d+)\s*[-:]\s*(\d+)\s*$")


def parse_game_score(raw: Any) -> Optional[GameScore]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, GameScore):
        return raw
    if isinstance(raw, dict):
        if "team1" in raw and "team2" in raw:
            try:
                return GameScore(team1=int(raw["team1"]), team2=int(raw["team2"]))
            except (TypeError, ValueError, ValidationError):
                return None
        raw = raw.get("display") or raw.get("score") or ""
    if not isinstance(raw, str):
        return None
    return _parse_score_string(raw)


def _parse_score_string(raw: str) -> Optional[GameScore]:
    match = _SCORE_RE.match(raw)
    if not match:
        return None
    return GameScore(team1=int(match.group(1)), team2=int(match.group(2)))


def format_score(score: Optional[GameScore]) -> Optional[str]:
    if score is None:
        return None
    return f"{score.team1}-{score.team2}"
