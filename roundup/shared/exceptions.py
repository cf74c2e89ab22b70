"""Error taxonomy for a newsletter run.

Every stage raises its own subclass; only the driver turns one into an
exit status.
"""


class NewsletterError(Exception):
    """Base class for any failure that aborts a run."""

    stage = "run"


class ConfigError(NewsletterError):
    """Raised when a required environment variable is missing or empty."""

    stage = "configuration"

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            "Missing required environment variable(s): " + ", ".join(self.missing)
        )


class GenerationError(NewsletterError):
    """Raised when the Gemini call fails or its reply is not a list of news items."""

    stage = "generation"


class RenderError(NewsletterError):
    """Raised when the template cannot be read or the page cannot be written."""

    stage = "rendering"


class DispatchError(NewsletterError):
    """Raised when the SMTP session, login or send fails."""

    stage = "dispatch"
