"""Error hierarchy for the trip planner API.

Every error raised on purpose by the service derives from ``PlannerError`` and
carries the HTTP status the central handler in ``tripplanner.main`` answers
with. The message is what the client sees, so upstream failures use a fixed,
generic message and keep the real cause on ``__cause__`` for the logs.
"""


class PlannerError(Exception):
    """Base class for errors that map to an ``{ok: false, error}`` response."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.message}


class ConfigurationError(PlannerError):
    """A required setting (usually an API key) is missing."""

    status_code = 500


class ValidationError(PlannerError):
    """The request is missing a required field or is malformed."""

    status_code = 400


class UpstreamError(PlannerError):
    """The LLM or search API could not be reached or answered with an error."""

    status_code = 500


class UpstreamTimeoutError(UpstreamError):
    status_code = 504

    def __init__(self, message: str = "Upstream request timed out"):
        super().__init__(message)


class ClientDisconnected(PlannerError):
    """The caller went away before the upstream call finished."""

    status_code = 499

    def __init__(self, message: str = "Client closed request"):
        super().__init__(message)
