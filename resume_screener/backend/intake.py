# intake.py
import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from .config import PDF_MIME_TYPE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IncomingFile:
    """A file handed to the pipeline by an upload widget or HTTP request."""
    name: str
    mime_type: str
    data: bytes = field(repr=False)


def is_pdf(file: IncomingFile) -> bool:
    return (file.mime_type or "").split(";")[0].strip().lower() == PDF_MIME_TYPE


def filter_pdf_files(files: Iterable[IncomingFile]) -> List[IncomingFile]:
    """
    Keep only PDF-typed files, preserving order.

    Anything else is dropped without an error so that a mixed drop still
    accepts its valid resumes.
    """
    accepted = []
    for f in files:
        if is_pdf(f):
            accepted.append(f)
        else:
            logger.debug("Dropping non-PDF upload %s (%s)", f.name, f.mime_type)
    return accepted
