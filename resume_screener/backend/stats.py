# stats.py
import math
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from .config import TOP_TIER_SCORE
from .models import EntryStatus, ResumeEntry


class PipelineStats(BaseModel):
    candidate_count: int = 0
    completed_count: int = 0
    average_score: int = 0
    top_tier_count: int = 0
    top_missing_skill: Optional[str] = None
    top_missing_skill_count: int = 0


def completed_entries(entries: Iterable[ResumeEntry]) -> List[ResumeEntry]:
    return [e for e in entries if e.status == EntryStatus.COMPLETED and e.result is not None]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_stats(entries: Iterable[ResumeEntry]) -> PipelineStats:
    """
    Aggregate the dashboard figures from a pipeline snapshot.

    The average is 0 when nothing has completed yet. The most common missing
    skill goes to whichever label was seen first when counts tie.
    """
    entries = list(entries)
    completed = completed_entries(entries)
    if not completed:
        return PipelineStats(candidate_count=len(entries))

    scores = [e.result.match_score for e in completed]

    missing_counts: Dict[str, int] = {}
    for entry in completed:
        for skill in entry.result.missing_skills:
            missing_counts[skill] = missing_counts.get(skill, 0) + 1

    top_skill, top_count = None, 0
    for skill, count in missing_counts.items():
        if count > top_count:
            top_skill, top_count = skill, count

    return PipelineStats(
        candidate_count=len(entries),
        completed_count=len(completed),
        average_score=round_half_up(sum(scores) / len(scores)),
        top_tier_count=sum(1 for s in scores if s >= TOP_TIER_SCORE),
        top_missing_skill=top_skill,
        top_missing_skill_count=top_count,
    )


def rank_entries(entries: Iterable[ResumeEntry]) -> List[ResumeEntry]:
    """Completed candidates by score (highest first), then the rest in pipeline order."""
    entries = list(entries)
    completed = sorted(completed_entries(entries), key=lambda e: e.result.match_score, reverse=True)
    ranked_ids = {e.id for e in completed}
    return completed + [e for e in entries if e.id not in ranked_ids]


def score_tier(score: float) -> str:
    if score >= TOP_TIER_SCORE:
        return "high"
    elif score >= 60:
        return "medium"
    else:
        return "low"
