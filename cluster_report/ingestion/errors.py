"""
Exception hierarchy for the cluster status report.

Every failure in the pipeline is fatal for the run. The entrypoint
catches ReportError, logs it and exits non-zero.
"""


class ReportError(RuntimeError):
    """Base class for all report pipeline failures."""


class ConfigError(ReportError):
    """A required setting is missing or invalid."""


class AuthError(ReportError):
    """Login request failed, returned non-200, or had no usable token."""


class TriggerError(ReportError):
    """The POST that starts the status computation could not be sent."""


class PollError(ReportError):
    """A status GET failed at the transport level."""


class PollTimeoutError(PollError):
    """Status never reached 'success' within the retry budget."""


class DecodeError(ReportError):
    """A response body was not the JSON we expected."""


class SinkError(ReportError):
    """Clearing or writing the destination failed."""
