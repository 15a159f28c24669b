# store.py
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .intake import IncomingFile
from .models import ResumeEntry

logger = logging.getLogger(__name__)


class PipelineStore:
    """
    Single source of truth for the candidate list and the job description.

    Entries are kept in insertion order. Writes replace one entry by id and
    never reorder or recreate the rest, so callbacks settling in any order
    cannot clobber each other.
    """

    def __init__(self):
        self._entries: List[ResumeEntry] = []
        self._index: Dict[str, int] = {}
        self._job_description = ""

    @property
    def job_description(self) -> str:
        return self._job_description

    def set_job_description(self, text: str) -> None:
        self._job_description = text or ""

    def add_entries(self, files: Iterable[IncomingFile]) -> List[ResumeEntry]:
        created = [
            ResumeEntry(source_file=f.data, mime_type=f.mime_type, display_name=f.name)
            for f in files
        ]
        self._append(created)
        logger.info("Added %d resume(s) to the pipeline", len(created))
        return created

    def seed_entries(self, entries: Iterable[ResumeEntry]) -> List[ResumeEntry]:
        """Append pre-built entries, e.g. demo candidates with no source file."""
        seeded = list(entries)
        for entry in seeded:
            entry.check_invariants()
        self._append(seeded)
        return seeded

    def _append(self, entries: List[ResumeEntry]) -> None:
        for entry in entries:
            self._index[entry.id] = len(self._entries)
            self._entries.append(entry)

    def remove_entry(self, entry_id: str) -> bool:
        position = self._index.pop(entry_id, None)
        if position is None:
            return False
        del self._entries[position]
        for i in range(position, len(self._entries)):
            self._index[self._entries[i].id] = i
        logger.info("Removed entry %s", entry_id)
        return True

    def update_entry(self, entry_id: str, **patch) -> Optional[ResumeEntry]:
        """
        Apply a partial update to one entry and return the new entry.

        Returns None when the entry no longer exists. Raises ValueError if the
        patch would leave status and result/error_message disagreeing.
        """
        position = self._index.get(entry_id)
        if position is None:
            return None
        updated = self._entries[position].model_copy(update=patch)
        updated.check_invariants()
        self._entries[position] = updated
        return updated

    def get(self, entry_id: str) -> Optional[ResumeEntry]:
        position = self._index.get(entry_id)
        return self._entries[position] if position is not None else None

    def snapshot(self) -> Tuple[ResumeEntry, ...]:
        return tuple(self._entries)

    def __len__(self):
        return len(self._entries)
