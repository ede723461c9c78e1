"""
Mood scoring: resolves categorical mood states into numeric scores.

The score map is built fresh per request from the user's current mood-state
definitions and is read-only for the rest of the computation.
"""

import math
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from moodweek.models import DayRecord, DayScore, MoodState


def round_half_up(value: float, decimals: int = 0) -> float:
    """Scale, round half toward +inf, unscale. Python's round() is banker's."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def build_score_map(mood_states: Iterable[MoodState]) -> Mapping[str, int]:
    """Map mood-state id -> score. Duplicate ids: the last definition wins."""
    scores = {}
    for state in mood_states:
        scores[state.id] = state.score
    return MappingProxyType(scores)


def _resolve(record, score_map: Mapping[str, int]) -> Optional[int]:
    mood_id = getattr(record, "mood_state_id", None)
    if mood_id is None:
        return None
    score = score_map.get(mood_id)
    if score is None or score < 0:
        return None
    return score


def average_score(
    records: Iterable[DayRecord],
    score_map: Mapping[str, int],
    decimals: int = 1,
) -> Optional[float]:
    """
    Mean score over records whose mood state resolves to a score >= 0.

    Unresolved ids and negative scores are excluded, not clamped.
    Returns None when nothing resolves.
    """
    scores = [s for s in (_resolve(r, score_map) for r in records) if s is not None]
    if not scores:
        return None
    return round_half_up(sum(scores) / len(scores), decimals)


def resolve_day_scores(
    days: Iterable[DayRecord],
    score_map: Mapping[str, int],
) -> List[DayScore]:
    """Turn day records into DayScore series using the same inclusion filter."""
    resolved = []
    for day in days:
        score = _resolve(day, score_map)
        if score is not None:
            resolved.append(DayScore(date=day.date, score=score))
    return resolved
