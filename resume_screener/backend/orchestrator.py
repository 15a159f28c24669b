# orchestrator.py
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from .config import ANALYSIS_TIMEOUT_SECONDS
from .errors import EntryNotFoundError, PipelineBusyError, PipelineValidationError
from .models import AnalysisResult, EntryStatus, ResumeEntry
from .store import PipelineStore

logger = logging.getLogger(__name__)

AnalyzeFn = Callable[[bytes, str, str], Awaitable[AnalysisResult]]

FALLBACK_ERROR_MESSAGE = "Failed to analyze"
MISSING_JD_MESSAGE = "Please enter a job description first."

RETRYABLE = (EntryStatus.IDLE, EntryStatus.ERROR)


class AnalysisOrchestrator:
    """
    Runs analysis over the pipeline.

    An action flips its working set to analyzing synchronously, then fans out
    one task per entry. Each task writes back only its own entry through the
    store, so results may settle in any order.
    """

    def __init__(self, store: PipelineStore, analyze: AnalyzeFn,
                 timeout_seconds: Optional[float] = ANALYSIS_TIMEOUT_SECONDS):
        self.store = store
        self.analyze = analyze
        self.timeout_seconds = timeout_seconds
        self._busy = False
        self._job_description = ""

    @property
    def is_busy(self) -> bool:
        return self._busy

    def _check_ready(self) -> str:
        job_description = self.store.job_description
        if not job_description.strip():
            raise PipelineValidationError(MISSING_JD_MESSAGE)
        if self._busy:
            raise PipelineBusyError("Analysis is already running.")
        return job_description

    def _begin(self, selected: List[ResumeEntry], job_description: str) -> List[ResumeEntry]:
        batch = []
        for entry in selected:
            if not entry.has_source:
                logger.info("Skipping %s: no source file to analyze", entry.display_name)
                continue
            flipped = self.store.update_entry(
                entry.id, status=EntryStatus.ANALYZING, result=None, error_message=None
            )
            batch.append(flipped)
        if batch:
            self._busy = True
            self._job_description = job_description
        return batch

    def start_analysis(self, include_completed: bool = False) -> List[ResumeEntry]:
        """
        Validate, select and optimistically flip the working set.

        Returns the entries to hand to dispatch(). The busy flag is set until
        dispatch() has settled every one of them.
        """
        job_description = self._check_ready()
        statuses = RETRYABLE + ((EntryStatus.COMPLETED,) if include_completed else ())
        selected = [e for e in self.store.snapshot() if e.status in statuses]
        batch = self._begin(selected, job_description)
        logger.info(">>> Starting analysis of %d resume(s)", len(batch))
        return batch

    def start_reanalysis(self, entry_id: str) -> List[ResumeEntry]:
        """Explicit re-run of one completed or errored entry."""
        job_description = self._check_ready()
        entry = self.store.get(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        if entry.status not in (EntryStatus.COMPLETED, EntryStatus.ERROR):
            return []
        return self._begin([entry], job_description)

    async def dispatch(self, batch: List[ResumeEntry]) -> None:
        """Analyze a started batch against the job description it was validated with."""
        if not batch:
            return
        job_description = self._job_description
        try:
            await asyncio.gather(*(self._analyze_entry(e, job_description) for e in batch))
        finally:
            self._busy = False
        logger.info("<<< Analysis batch settled (%d resume(s))", len(batch))

    async def run_analysis(self, include_completed: bool = False) -> List[ResumeEntry]:
        batch = self.start_analysis(include_completed=include_completed)
        await self.dispatch(batch)
        return batch

    async def reanalyze_entry(self, entry_id: str) -> None:
        batch = self.start_reanalysis(entry_id)
        await self.dispatch(batch)

    async def _analyze_entry(self, entry: ResumeEntry, job_description: str) -> None:
        try:
            call = self.analyze(entry.source_file, entry.mime_type, job_description)
            if self.timeout_seconds:
                result = await asyncio.wait_for(call, timeout=self.timeout_seconds)
            else:
                result = await call
        except asyncio.TimeoutError:
            self._settle_error(entry, f"Analysis timed out after {self.timeout_seconds:g}s")
        except Exception as e:
            self._settle_error(entry, str(e) or FALLBACK_ERROR_MESSAGE)
        else:
            updated = self.store.update_entry(
                entry.id, status=EntryStatus.COMPLETED, result=result, error_message=None
            )
            if updated is None:
                logger.info("Entry %s was removed before its analysis settled", entry.id)
            else:
                logger.info("<<< %s scored %.0f", result.candidate_name, result.match_score)

    def _settle_error(self, entry: ResumeEntry, message: str) -> None:
        logger.warning("!!! Analysis failed for %s: %s", entry.display_name, message)
        self.store.update_entry(entry.id, status=EntryStatus.ERROR, result=None, error_message=message)
