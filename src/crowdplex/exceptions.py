"""Error types shared by the upstream client and the ranking pipeline."""


class UpstreamError(Exception):
    """The Cineplex API answered with a non-success status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        self.message = message or f"Cineplex API returned status {status_code}"
        super().__init__(self.message)


class PipelineError(Exception):
    """A ranking pipeline stage failed unexpectedly; no partial ranking exists."""
