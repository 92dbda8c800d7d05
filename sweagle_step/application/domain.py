"""
This module defines the core domain models for the build step.

These classes represent the pure, technology-agnostic entities and the ports
(interfaces) that the application's business logic operates on. The host CI
runtime is only ever reached through the ports declared here.
"""

import dataclasses
from pathlib import Path

from abc import ABC, abstractmethod
from typing import NoReturn, Optional

NO_LIMIT = -1


# --- Ports (Host Capabilities) ---

class SecretProvider(ABC):
    """A port for anything that can hand out the API token on demand."""

    @abstractmethod
    def reveal(self) -> str:
        """Returns the plain token. Only called while building a request."""
        pass


class ProgressSink(ABC):
    """A port for the job's console/progress output."""

    @abstractmethod
    def info(self, message: str):
        pass

    @abstractmethod
    def debug(self, message: str):
        pass

    @abstractmethod
    def error(self, message: str):
        pass


class JobControl(ABC):
    """A port for signalling the enclosing job."""

    @abstractmethod
    def abort(
        self, message: str, cause: Optional[BaseException] = None
    ) -> NoReturn:
        """Stops the job. Never returns."""
        pass


# --- Domain Models ---

@dataclasses.dataclass(frozen=True)
class ServiceEndpoint:
    """The Sweagle tenant to talk to and the credential to use."""

    base_url: str
    credential: SecretProvider

    def url_for(self, path: str) -> str:
        return self.base_url.rstrip("/") + path


@dataclasses.dataclass(frozen=True)
class Threshold:
    """
    Upper bounds for validation counts.

    A limit of NO_LIMIT (-1) disables the corresponding check.
    """

    warn_max: int = NO_LIMIT
    err_max: int = NO_LIMIT

    @staticmethod
    def exceeded_by(count: int, limit: int) -> bool:
        return limit != NO_LIMIT and count > limit


@dataclasses.dataclass(frozen=True)
class ValidationRequest:
    mds_name: str
    for_incoming: bool = True
    with_custom_validations: bool = True


@dataclasses.dataclass(frozen=True)
class ValidationResult:
    """Counts parsed from a validation report, plus the report itself."""

    errors: int
    warnings: int
    body: str


@dataclasses.dataclass(frozen=True)
class UploadRequest:
    """A config file to load under a node of the data tree."""

    node_path: str
    format: str
    content: str
    allow_delete: bool = False
    auto_approve: bool = True
    store_snapshot_results: bool = False
    validation_level: str = "error"


@dataclasses.dataclass(frozen=True)
class SnapshotRequest:
    mds_name: str
    description: str = ""
    tag: str = ""
    level: str = "none"


@dataclasses.dataclass(frozen=True)
class ServiceResponse:
    """A response body as received (`content`) and as decoded text."""

    content: bytes
    text: str


@dataclasses.dataclass(frozen=True)
class ExportRequest:
    """An MDS to render through a server-side exporter into a file."""

    mds_name: str
    exporter: str
    args: str
    format: str
    destination: Path


# --- Ports (Remote Service) ---

class ConfigService(ABC):
    """
    A port for the remote configuration service.

    Implementations return raw response bodies and raise TransportError on
    any failed exchange; they never decide whether a failure is fatal.
    """

    @abstractmethod
    async def validate(
        self, endpoint: ServiceEndpoint, request: ValidationRequest
    ) -> ValidationResult:
        """
        Runs the validators of an MDS. Raises MalformedResponseError if the
        report carries no usable summary.
        """
        pass

    @abstractmethod
    async def upload(
        self, endpoint: ServiceEndpoint, request: UploadRequest
    ) -> str:
        """Loads config data into the node path."""
        pass

    @abstractmethod
    async def snapshot(
        self, endpoint: ServiceEndpoint, request: SnapshotRequest
    ) -> str:
        """Turns pending data of an MDS into a snapshot."""
        pass

    @abstractmethod
    async def export(
        self, endpoint: ServiceEndpoint, request: ExportRequest
    ) -> ServiceResponse:
        """Renders an MDS through an exporter and returns the rendered document."""
        pass
