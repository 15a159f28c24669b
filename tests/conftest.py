"""
Shared fixtures for the Smart Resume Screener tests.
"""
import pytest

from resume_screener.backend.intake import IncomingFile
from resume_screener.backend.models import AnalysisResult, EntryStatus, ResumeEntry
from resume_screener.backend.store import PipelineStore


def build_result(name="Jordan Lee", score=90, missing_skills=None) -> AnalysisResult:
    return AnalysisResult(
        candidate_name=name,
        role_match="Frontend Engineer",
        match_score=score,
        years_of_experience=5,
        summary="Experienced engineer.",
        skills=[{"name": "React", "category": "Technical", "relevance": "High"}],
        missing_skills=missing_skills or [],
        experience=[{"role": "Dev", "company": "Acme", "duration": "2020-2024", "highlights": ["Shipped"]}],
        reasoning="Good fit.",
    )


def pdf(name: str, data: bytes = b"%PDF-1.4 fake") -> IncomingFile:
    return IncomingFile(name=name, mime_type="application/pdf", data=data)


def completed_entry(name="seed.pdf", score=90, missing_skills=None, source=None) -> ResumeEntry:
    return ResumeEntry(
        display_name=name,
        source_file=source,
        status=EntryStatus.COMPLETED,
        result=build_result(name=name.split(".")[0], score=score, missing_skills=missing_skills),
    )


@pytest.fixture
def store():
    return PipelineStore()


@pytest.fixture
def make_result():
    return build_result
