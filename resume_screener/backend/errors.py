# errors.py


class ScreenerError(Exception):
    """Base class for every error raised by the screener backend."""


class ConfigurationError(ScreenerError):
    pass


class PipelineValidationError(ScreenerError, ValueError):
    """User input must be corrected before the action can run."""


class PipelineBusyError(ScreenerError):
    """An analysis batch is still in flight."""


class EntryNotFoundError(ScreenerError, KeyError):
    def __init__(self, entry_id: str):
        super().__init__(entry_id)
        self.entry_id = entry_id

    def __str__(self):
        return f"Resume entry not found: {self.entry_id}"


class ChatRejectedError(ScreenerError, ValueError):
    pass


class ChatPendingError(ScreenerError):
    """A chat turn for this entry is still awaiting its response."""


class AnalysisError(ScreenerError):
    """The model service returned nothing usable for a resume."""
