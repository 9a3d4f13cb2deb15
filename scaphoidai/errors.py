"""Error taxonomy for fracture risk prediction.

Every error carries a ``message`` that is safe to show an end user. Diagnostic
detail about the underlying failure is logged where it happens and kept on the
exception chain (``__cause__``), never put into ``message``.
"""


class PredictionError(Exception):
    code = "prediction_error"
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(PredictionError):
    """The prediction service is not configured (e.g. no credential). Not retried."""

    code = "configuration_error"
    default_message = "API key is missing. Please set the API key environment variable."


class ServiceError(PredictionError):
    """The remote call failed or its reply did not validate. Safe to retry manually."""

    code = "service_error"
    default_message = "Failed to analyze patient data. Please try again."
