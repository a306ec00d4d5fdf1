class WebhookError(Exception):
    """Base class for every error raised by the webhook."""


class InvalidInput(WebhookError):
    """Nickname or event type is missing or empty."""


class Unauthorized(WebhookError):
    """Shared-secret header is configured and the request does not carry it."""


class MethodNotAllowed(WebhookError):
    """Request method other than GET or POST."""


class ConfigurationError(WebhookError):
    """Required settings are missing at startup."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required settings: {', '.join(missing)}")


class BackendUnavailable(WebhookError):
    """Credential parse, authorization or read failure against the sheet."""


class BackendWriteFailed(WebhookError):
    """Append or update of a row was rejected."""
