# models.py
import time
import uuid
from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _ServiceModel(BaseModel):
    """Immutable value parsed from the model service's camelCase JSON."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
    )


class Skill(_ServiceModel):
    name: str
    category: Literal["Technical", "Soft", "Domain", "Tool"] = "Technical"
    years_of_experience: Optional[float] = None
    relevance: Literal["High", "Medium", "Low"] = "Medium"


class Education(_ServiceModel):
    degree: str = ""
    institution: str = ""
    year: Optional[str] = None


class WorkExperience(_ServiceModel):
    role: str = ""
    company: str = ""
    duration: str = ""
    highlights: List[str] = Field(default_factory=list)


class ContactInfo(_ServiceModel):
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None
    location: Optional[str] = None


class AnalysisResult(_ServiceModel):
    """
    Structured analysis of one resume against the job description.

    Every field is supplied by the model service in a single response;
    nothing here is derived locally.
    """
    candidate_name: str
    role_match: str = ""
    match_score: float
    years_of_experience: float = 0
    contact: ContactInfo = Field(default_factory=ContactInfo)
    summary: str = ""
    skills: List[Skill]
    missing_skills: List[str] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    experience: List[WorkExperience]
    reasoning: str

    @field_validator("match_score")
    @classmethod
    def clamp_score(cls, value: float) -> float:
        return max(0.0, min(100.0, value))

    @field_validator("contact", mode="before")
    @classmethod
    def empty_contact(cls, value):
        return value if value is not None else {}


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: ChatRole
    text: str
    timestamp: float = Field(default_factory=time.time)


class EntryStatus(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    ERROR = "error"


def generate_id() -> str:
    return uuid.uuid4().hex


class ResumeEntry(BaseModel):
    """
    One tracked resume submission and its lifecycle state.

    Entries are frozen: every change produces a new entry that replaces the
    old one in the store at the same position.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    source_file: Optional[bytes] = Field(default=None, repr=False, exclude=True)
    mime_type: str = "application/pdf"
    display_name: str
    status: EntryStatus = EntryStatus.IDLE
    result: Optional[AnalysisResult] = None
    error_message: Optional[str] = None
    conversation: Tuple[ChatMessage, ...] = ()
    created_at: float = Field(default_factory=time.time)

    @property
    def label(self) -> str:
        if self.status == EntryStatus.COMPLETED and self.result is not None:
            return self.result.candidate_name
        return self.display_name

    @property
    def has_source(self) -> bool:
        return bool(self.source_file)

    def check_invariants(self) -> None:
        """Raise ValueError if status disagrees with result/error_message."""
        has_result = self.result is not None
        has_error = bool(self.error_message)
        if self.status == EntryStatus.COMPLETED:
            ok = has_result and not has_error
        elif self.status == EntryStatus.ERROR:
            ok = has_error and not has_result
        else:
            ok = not has_result and not has_error
        if not ok:
            raise ValueError(
                f"Entry {self.id} is '{self.status.value}' but result={has_result}, error={has_error}"
            )
