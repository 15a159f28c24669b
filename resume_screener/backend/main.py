import logging
from typing import List, Optional

from fastapi import BackgroundTasks, FastAPI, File, HTTPException, Response, UploadFile
from pydantic import BaseModel

from .chat import ChatFn, ChatSessionAdapter
from .config import configure_logging
from .demo import DEMO_JOB_DESCRIPTION, demo_entries
from .errors import (
    ChatPendingError,
    ChatRejectedError,
    EntryNotFoundError,
    PipelineBusyError,
    PipelineValidationError,
)
from .gemini_service import GeminiService
from .intake import IncomingFile, filter_pdf_files
from .models import AnalysisResult, ChatMessage, EntryStatus, ResumeEntry
from .orchestrator import AnalysisOrchestrator, AnalyzeFn
from .stats import PipelineStats, compute_stats, rank_entries, round_half_up, score_tier
from .store import PipelineStore

logger = logging.getLogger(__name__)


class EntryView(BaseModel):
    id: str
    display_name: str
    label: str
    status: EntryStatus
    result: Optional[AnalysisResult] = None
    error_message: Optional[str] = None
    conversation: List[ChatMessage] = []
    created_at: float
    has_source: bool
    display_score: Optional[int] = None
    score_tier: Optional[str] = None
    awaiting_reply: bool = False


class PipelineResponse(BaseModel):
    job_description: str
    is_busy: bool
    entries: List[EntryView]


class JobDescriptionRequest(BaseModel):
    text: str


class AnalysisStarted(BaseModel):
    dispatched: List[str]


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    reply: Optional[ChatMessage] = None
    conversation: List[ChatMessage]


def create_app(analyze: Optional[AnalyzeFn] = None, chat: Optional[ChatFn] = None) -> FastAPI:
    """
    Build the API around one in-process pipeline.

    The Gemini service is used for any collaborator not passed in.
    """
    configure_logging()
    if analyze is None or chat is None:
        service = GeminiService()
        analyze = analyze or service.analyze_resume
        chat = chat or service.chat_with_candidate

    store = PipelineStore()
    orchestrator = AnalysisOrchestrator(store, analyze)
    chat_adapter = ChatSessionAdapter(store, chat)

    app = FastAPI(
        title="Smart Resume Screener",
        description="AI-powered resume screening with a ranked candidate pipeline and per-candidate chat",
        version="2.0.0",
    )
    app.state.store = store
    app.state.orchestrator = orchestrator
    app.state.chat = chat_adapter

    def view(entry: ResumeEntry) -> EntryView:
        return EntryView(
            id=entry.id,
            display_name=entry.display_name,
            label=entry.label,
            status=entry.status,
            result=entry.result,
            error_message=entry.error_message,
            conversation=list(entry.conversation),
            created_at=entry.created_at,
            has_source=entry.has_source,
            display_score=round_half_up(entry.result.match_score) if entry.result else None,
            score_tier=score_tier(entry.result.match_score) if entry.result else None,
            awaiting_reply=chat_adapter.is_awaiting(entry.id),
        )

    @app.get("/")
    async def check():
        return {"status": "live", "message": "Resume Screener API is running"}

    @app.get("/pipeline", response_model=PipelineResponse)
    async def get_pipeline(ranked: bool = False):
        entries = rank_entries(store.snapshot()) if ranked else store.snapshot()
        return PipelineResponse(
            job_description=store.job_description,
            is_busy=orchestrator.is_busy,
            entries=[view(e) for e in entries],
        )

    @app.put("/pipeline/job-description")
    async def set_job_description(body: JobDescriptionRequest):
        store.set_job_description(body.text)
        return {"job_description": store.job_description}

    @app.post("/resumes", response_model=List[EntryView])
    async def upload_resumes(files: List[UploadFile] = File(...)):
        incoming = []
        for f in files:
            incoming.append(IncomingFile(name=f.filename or "resume.pdf",
                                         mime_type=f.content_type or "",
                                         data=await f.read()))
        created = store.add_entries(filter_pdf_files(incoming))
        return [view(e) for e in created]

    @app.delete("/resumes/{entry_id}", status_code=204)
    async def remove_resume(entry_id: str):
        store.remove_entry(entry_id)
        return Response(status_code=204)

    @app.post("/analyze", response_model=AnalysisStarted, status_code=202)
    async def analyze_pipeline(background_tasks: BackgroundTasks, include_completed: bool = False):
        try:
            batch = orchestrator.start_analysis(include_completed=include_completed)
        except PipelineValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except PipelineBusyError as e:
            raise HTTPException(status_code=409, detail=str(e))
        background_tasks.add_task(orchestrator.dispatch, batch)
        return AnalysisStarted(dispatched=[e.id for e in batch])

    @app.post("/resumes/{entry_id}/reanalyze", response_model=AnalysisStarted, status_code=202)
    async def reanalyze_resume(entry_id: str, background_tasks: BackgroundTasks):
        try:
            batch = orchestrator.start_reanalysis(entry_id)
        except PipelineValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except PipelineBusyError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except EntryNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        if batch:
            background_tasks.add_task(orchestrator.dispatch, batch)
        return AnalysisStarted(dispatched=[e.id for e in batch])

    @app.post("/resumes/{entry_id}/chat", response_model=ChatResponse)
    async def chat_with_resume(entry_id: str, body: ChatRequest):
        try:
            reply = await chat_adapter.send_message(entry_id, body.message)
        except EntryNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ChatRejectedError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except ChatPendingError as e:
            raise HTTPException(status_code=409, detail=str(e))
        entry = store.get(entry_id)
        return ChatResponse(reply=reply, conversation=list(entry.conversation) if entry else [])

    @app.get("/stats", response_model=PipelineStats)
    async def get_stats():
        return compute_stats(store.snapshot())

    @app.post("/demo", response_model=List[EntryView])
    async def load_demo():
        store.set_job_description(DEMO_JOB_DESCRIPTION)
        seeded = store.seed_entries(demo_entries())
        logger.info("Seeded %d demo candidates", len(seeded))
        return [view(e) for e in seeded]

    return app


app = create_app()
