"""Tests for dashboard aggregates and ranking."""

import pytest

from resume_screener.backend.models import EntryStatus, ResumeEntry
from resume_screener.backend.stats import compute_stats, rank_entries, round_half_up, score_tier

from conftest import completed_entry


def test_average_of_completed_scores():
    stats = compute_stats([
        completed_entry("jordan.pdf", score=92, missing_skills=["GraphQL", "AWS"]),
        completed_entry("alex.pdf", score=78, missing_skills=["React", "Kubernetes"]),
    ])

    assert stats.candidate_count == 2
    assert stats.completed_count == 2
    assert stats.average_score == 85
    assert stats.top_tier_count == 1


def test_no_overlap_tie_goes_to_first_encountered():
    stats = compute_stats([
        completed_entry("jordan.pdf", missing_skills=["GraphQL", "AWS"]),
        completed_entry("alex.pdf", missing_skills=["React", "Kubernetes"]),
    ])

    assert stats.top_missing_skill == "GraphQL"
    assert stats.top_missing_skill_count == 1


def test_most_common_missing_skill():
    stats = compute_stats([
        completed_entry("a.pdf", missing_skills=["GraphQL", "AWS"]),
        completed_entry("b.pdf", missing_skills=["AWS"]),
    ])

    assert stats.top_missing_skill == "AWS"
    assert stats.top_missing_skill_count == 2


def test_empty_completed_set():
    stats = compute_stats([ResumeEntry(display_name="a.pdf"), ResumeEntry(display_name="b.pdf")])

    assert stats.candidate_count == 2
    assert stats.completed_count == 0
    assert stats.average_score == 0
    assert stats.top_tier_count == 0
    assert stats.top_missing_skill is None


def test_non_completed_entries_are_ignored():
    stats = compute_stats([
        completed_entry("a.pdf", score=60, missing_skills=["Go"]),
        ResumeEntry(display_name="b.pdf", status=EntryStatus.ERROR, error_message="boom"),
        ResumeEntry(display_name="c.pdf", status=EntryStatus.ANALYZING),
    ])

    assert stats.candidate_count == 3
    assert stats.average_score == 60
    assert stats.top_missing_skill == "Go"


def test_top_tier_threshold_is_inclusive():
    stats = compute_stats([completed_entry(score=80), completed_entry(score=79.9)])
    assert stats.top_tier_count == 1


@pytest.mark.parametrize("value, expected", [(84.5, 85), (85.5, 86), (84.49, 84), (0, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_rank_entries():
    idle = ResumeEntry(display_name="idle.pdf")
    low = completed_entry("low.pdf", score=40)
    high = completed_entry("high.pdf", score=95)
    failed = ResumeEntry(display_name="failed.pdf", status=EntryStatus.ERROR, error_message="x")

    ranked = rank_entries([idle, low, failed, high])

    assert [e.display_name for e in ranked] == ["high.pdf", "low.pdf", "idle.pdf", "failed.pdf"]


@pytest.mark.parametrize("score, tier", [(92, "high"), (80, "high"), (60, "medium"), (59, "low")])
def test_score_tier(score, tier):
    assert score_tier(score) == tier
