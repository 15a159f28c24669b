"""Tests for the pipeline data model."""

import pytest
from pydantic import ValidationError

from resume_screener.backend.models import AnalysisResult, ChatMessage, ChatRole, EntryStatus, ResumeEntry

from conftest import build_result


class TestAnalysisResult:
    """Tests for parsing the model service's JSON."""

    def test_parses_camel_case_payload(self):
        payload = """
        {
            "candidateName": "Alex Chen",
            "roleMatch": "Full Stack Developer",
            "matchScore": 78,
            "yearsOfExperience": 4,
            "contact": {"email": "alex.c@example.com", "phone": null},
            "summary": "Versatile developer.",
            "skills": [{"name": "Python", "category": "Technical", "yearsOfExperience": 4, "relevance": "High"}],
            "missingSkills": ["React", "Kubernetes"],
            "education": [{"degree": "Bootcamp Cert", "institution": "Code Academy"}],
            "experience": [{"role": "Backend Eng", "company": "DataCo", "duration": "2020-Present", "highlights": ["Optimized API latency"]}],
            "reasoning": "Lacks React depth."
        }
        """
        result = AnalysisResult.model_validate_json(payload)

        assert result.candidate_name == "Alex Chen"
        assert result.match_score == 78
        assert result.contact.email == "alex.c@example.com"
        assert result.contact.phone is None
        assert result.skills[0].years_of_experience == 4
        assert result.missing_skills == ["React", "Kubernetes"]
        assert result.education[0].year is None
        assert result.experience[0].highlights == ["Optimized API latency"]

    def test_optional_sections_default_to_empty(self):
        result = AnalysisResult.model_validate({
            "candidateName": "Sam",
            "matchScore": 50,
            "skills": [],
            "experience": [],
            "reasoning": "Thin resume.",
            "contact": None,
        })

        assert result.missing_skills == []
        assert result.education == []
        assert result.contact.email is None

    def test_missing_required_field_is_rejected(self):
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate({"candidateName": "Sam", "skills": [], "experience": []})

    def test_score_is_clamped(self):
        assert build_result(score=130).match_score == 100
        assert build_result(score=-5).match_score == 0

    def test_result_is_immutable(self):
        result = build_result()
        with pytest.raises(ValidationError):
            result.match_score = 10


class TestResumeEntry:
    """Tests for ResumeEntry defaults and invariants."""

    def test_defaults(self):
        entry = ResumeEntry(display_name="cv.pdf", source_file=b"data")

        assert entry.status == EntryStatus.IDLE
        assert entry.conversation == ()
        assert entry.result is None
        assert entry.error_message is None
        assert entry.has_source
        assert entry.label == "cv.pdf"
        entry.check_invariants()

    def test_ids_are_unique(self):
        assert ResumeEntry(display_name="a").id != ResumeEntry(display_name="a").id

    def test_label_uses_candidate_name_once_completed(self):
        entry = ResumeEntry(display_name="cv.pdf", status=EntryStatus.COMPLETED, result=build_result(name="Jordan"))
        assert entry.label == "Jordan"

    def test_source_bytes_not_dumped(self):
        entry = ResumeEntry(display_name="cv.pdf", source_file=b"secret")
        assert "source_file" not in entry.model_dump()

    @pytest.mark.parametrize("fields", [
        {"status": EntryStatus.COMPLETED},
        {"status": EntryStatus.COMPLETED, "result": build_result(), "error_message": "boom"},
        {"status": EntryStatus.ERROR},
        {"status": EntryStatus.ERROR, "error_message": "boom", "result": build_result()},
        {"status": EntryStatus.IDLE, "error_message": "boom"},
        {"status": EntryStatus.ANALYZING, "result": build_result()},
    ])
    def test_inconsistent_states_fail_invariant_check(self, fields):
        entry = ResumeEntry(display_name="cv.pdf", **fields)
        with pytest.raises(ValueError):
            entry.check_invariants()


def test_chat_message_roles():
    msg = ChatMessage(role="assistant", text="Hi")
    assert msg.role == ChatRole.ASSISTANT
    assert msg.timestamp > 0
