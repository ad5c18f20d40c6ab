"""
Domain errors raised by the analysis pipeline and job-board connectors.
Routes translate them into HTTP responses; services never swallow them.
"""


class JobPilotError(Exception):
    """Base class for all pipeline errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AnalysisError(JobPilotError):
    """Job description analysis failed (provider error or unparseable response)."""


class ScoringError(JobPilotError):
    """Match score calculation failed."""


class GenerationError(JobPilotError):
    """Cover letter generation failed."""


class ConnectorError(JobPilotError):
    """Job board answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(JobPilotError):
    """No response was received from the job board."""


class ConnectorNotConfiguredError(JobPilotError):
    """Connector is missing its credentials."""


class ValidationError(JobPilotError):
    """Resume document failed the minimal structure check."""
