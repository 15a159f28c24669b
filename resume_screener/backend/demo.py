# demo.py
from typing import List

from .models import (
    AnalysisResult,
    ContactInfo,
    Education,
    EntryStatus,
    ResumeEntry,
    Skill,
    WorkExperience,
)

DEMO_JOB_DESCRIPTION = (
    "We are looking for a Senior Frontend Developer with 5+ years of experience in React, "
    "TypeScript, and modern CSS frameworks. Experience with Node.js is a plus. "
    "Must have a degree in CS or equivalent."
)


def demo_results() -> List[AnalysisResult]:
    return [
        AnalysisResult(
            candidate_name="Jordan Lee",
            role_match="Senior Frontend Engineer",
            match_score=92,
            years_of_experience=6,
            contact=ContactInfo(email="jordan.lee@example.com", location="San Francisco, CA"),
            summary="Frontend engineer focused on the React ecosystem and performance work.",
            skills=[
                Skill(name="React", category="Technical", years_of_experience=5, relevance="High"),
                Skill(name="TypeScript", category="Technical", years_of_experience=4, relevance="High"),
                Skill(name="Tailwind CSS", category="Technical", years_of_experience=3, relevance="Medium"),
                Skill(name="Node.js", category="Technical", years_of_experience=2, relevance="Medium"),
            ],
            missing_skills=["GraphQL", "AWS"],
            education=[Education(degree="BS Computer Science", institution="University of Tech", year="2018")],
            experience=[
                WorkExperience(role="Senior Frontend Dev", company="TechFlow", duration="2021-Present",
                               highlights=["Led migration to Next.js", "Improved LCP by 40%"]),
                WorkExperience(role="Web Developer", company="Creative Agency", duration="2018-2021",
                               highlights=["Built 15+ client sites"]),
            ],
            reasoning="Strong React/TypeScript match. Slight gap in cloud infrastructure.",
        ),
        AnalysisResult(
            candidate_name="Alex Chen",
            role_match="Full Stack Developer",
            match_score=78,
            years_of_experience=4,
            contact=ContactInfo(email="alex.c@example.com", location="Remote"),
            summary="Backend-leaning developer comfortable with Python and JavaScript.",
            skills=[
                Skill(name="Python", category="Technical", years_of_experience=4, relevance="High"),
                Skill(name="Django", category="Technical", years_of_experience=3, relevance="High"),
                Skill(name="JavaScript", category="Technical", years_of_experience=4, relevance="Medium"),
                Skill(name="Docker", category="Tool", years_of_experience=2, relevance="Medium"),
            ],
            missing_skills=["React", "Kubernetes"],
            education=[Education(degree="Bootcamp Cert", institution="Code Academy", year="2019")],
            experience=[
                WorkExperience(role="Backend Eng", company="DataCo", duration="2020-Present",
                               highlights=["Optimized API latency"]),
            ],
            reasoning="Solid backend skills but lacks the React depth the role needs.",
        ),
    ]


def demo_entries() -> List[ResumeEntry]:
    """Pre-analyzed candidates with no source file behind them."""
    names = ["jordan_lee_resume.pdf", "alex_chen_resume.pdf"]
    return [
        ResumeEntry(display_name=name, status=EntryStatus.COMPLETED, result=result)
        for name, result in zip(names, demo_results())
    ]
