"""
Core business exceptions for the Sweagle build step.

This module defines a hierarchy of custom exceptions to allow for granular
error handling and clear separation of failure domains. Everything except
JobAbortedError is a *condition*; whether a condition aborts the job or is
only logged is decided per call by the `mark_failed` flag.
"""


class SweagleStepError(Exception):
    """Base exception for all component-specific errors."""
    pass


# --- Configuration Errors ---

class ConfigurationError(SweagleStepError):
    """Raised for errors related to application configuration."""
    pass


# --- Infrastructure Errors ---

class InfrastructureError(SweagleStepError):
    """Base class for errors related to external systems (network, disk)."""
    pass


class TransportError(InfrastructureError):
    """Raised when an exchange with the Sweagle API fails."""
    pass


class FileSystemError(InfrastructureError):
    """Raised when a workspace file cannot be read or written."""
    pass


# --- Domain/Business Logic Errors ---

class DomainError(SweagleStepError):
    """Base class for errors related to business logic failures."""
    pass


class MalformedResponseError(DomainError):
    """Raised when a validation report lacks integer summary counts."""
    pass


class ThresholdExceededError(DomainError):
    """Raised when a validation count is over its configured limit."""

    def __init__(self, kind: str, count: int, limit: int):
        self.kind = kind
        self.count = count
        self.limit = limit
        super().__init__(
            f"{kind.capitalize()}s: {count} exceeds {kind} threshold: {limit}"
        )


# --- Job Control ---

class JobAbortedError(SweagleStepError):
    """The fatal signal: the enclosing CI job must stop."""
    pass
