# gemini_service.py
import json
import logging
from typing import Optional, Sequence

import google.generativeai as genai
from pydantic import ValidationError

from .config import GEMINI_MODEL, GOOGLE_API_KEY
from .errors import AnalysisError, ConfigurationError
from .models import AnalysisResult, ChatMessage, ChatRole

logger = logging.getLogger(__name__)

EMPTY_CHAT_REPLY = "I couldn't generate a response."

_NULLABLE_STRING = {"type": "STRING", "nullable": True}

ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "candidateName": {"type": "STRING"},
        "yearsOfExperience": {"type": "NUMBER", "description": "Total years of relevant experience"},
        "contact": {
            "type": "OBJECT",
            "properties": {
                "email": _NULLABLE_STRING,
                "phone": _NULLABLE_STRING,
                "linkedin": _NULLABLE_STRING,
                "portfolio": _NULLABLE_STRING,
                "location": _NULLABLE_STRING,
            },
        },
        "roleMatch": {"type": "STRING", "description": "The most fitting job title"},
        "matchScore": {"type": "NUMBER"},
        "summary": {"type": "STRING"},
        "skills": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "category": {"type": "STRING", "enum": ["Technical", "Soft", "Domain", "Tool"]},
                    "yearsOfExperience": {"type": "NUMBER", "nullable": True},
                    "relevance": {"type": "STRING", "enum": ["High", "Medium", "Low"]},
                },
            },
        },
        "missingSkills": {"type": "ARRAY", "items": {"type": "STRING"}},
        "education": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "degree": {"type": "STRING"},
                    "institution": {"type": "STRING"},
                    "year": _NULLABLE_STRING,
                },
            },
        },
        "experience": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "role": {"type": "STRING"},
                    "company": {"type": "STRING"},
                    "duration": {"type": "STRING"},
                    "highlights": {"type": "ARRAY", "items": {"type": "STRING"}},
                },
            },
        },
        "reasoning": {"type": "STRING"},
    },
    "required": ["candidateName", "matchScore", "skills", "reasoning", "experience"],
}


def build_analysis_prompt(job_description: str) -> str:
    return f"""
    You are an expert Senior Technical Recruiter.
    Analyze the provided resume against the Job Description below with extreme scrutiny.

    JOB DESCRIPTION:
    {job_description}

    TASK:
    1. Extract candidate details (Contact, Education, Experience).
    2. Analyze skills and categorize them. Estimate years of experience per skill based on work history context.
    3. Determine a 'matchScore' (0-100). Be strict. 90+ is perfect match, 70+ is good, below 50 is poor.
    4. Identify GAPS (missingSkills).
    5. Provide a specific, no-fluff reasoning for the score.

    Return strictly JSON adhering to the schema.
    """


def build_chat_prompt(result: AnalysisResult, history: Sequence[ChatMessage], message: str) -> str:
    """
    Flatten the grounding data and the whole conversation into one prompt.

    The full history is replayed on every turn; no chat session is kept
    between calls.
    """
    history = list(history)
    if history and history[-1].role == ChatRole.USER and history[-1].text == message:
        history = history[:-1]
    history_text = "\n".join(f"{m.role.value.upper()}: {m.text}" for m in history)

    return f"""
    Candidate Data: {result.model_dump_json()}

    You are an AI Assistant helping a recruiter interview this candidate virtually.
    Answer questions about the candidate based ONLY on the provided data.
    If the information is not in the data, say "I cannot find that information in the resume."
    Keep answers concise and professional.

    Current Conversation:
    {history_text}
    USER: {message}
    ASSISTANT:
    """


def clean_json_response(text: str) -> str:
    return text.strip().replace("```json", "").replace("```", "").strip()


def _response_text(response) -> str:
    # .text raises ValueError when the response was blocked or has no parts
    try:
        return response.text if response else ""
    except ValueError as e:
        logger.warning("!!! Gemini returned no usable text: %s", e)
        return ""


class GeminiService:
    """Resume analysis and candidate chat calls against Google Gemini."""

    def __init__(self, api_key: Optional[str] = GOOGLE_API_KEY, model_name: str = GEMINI_MODEL):
        self.api_key = api_key
        self.model_name = model_name
        self._model = None

    def _get_model(self):
        if not self.api_key:
            raise ConfigurationError("API Key not found in environment variables.")
        if self._model is None:
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(self.model_name)
        return self._model

    async def analyze_resume(self, file_bytes: bytes, mime_type: str, job_description: str) -> AnalysisResult:
        model = self._get_model()
        logger.info(">>> Sending resume (%d bytes) to %s", len(file_bytes), self.model_name)

        response = await model.generate_content_async(
            [{"mime_type": mime_type, "data": file_bytes}, build_analysis_prompt(job_description)],
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=ANALYSIS_SCHEMA,
            ),
        )
        text = _response_text(response)
        if not text:
            raise AnalysisError("No response from AI")

        try:
            return AnalysisResult.model_validate_json(clean_json_response(text))
        except (ValidationError, json.JSONDecodeError) as e:
            logger.error("!!! Could not parse analysis response: %s", e)
            logger.debug("Raw response that failed: %s", text[:500])
            raise AnalysisError("The AI returned an analysis that could not be read.") from e

    async def chat_with_candidate(self, result: AnalysisResult, history: Sequence[ChatMessage], message: str) -> str:
        model = self._get_model()
        response = await model.generate_content_async(build_chat_prompt(result, history, message))
        return _response_text(response).strip() or EMPTY_CHAT_REPLY
