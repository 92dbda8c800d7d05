"""
Host capability adapters: how the build step reaches the CI job it runs in.

These implement the SecretProvider, ProgressSink and JobControl ports for a
job that invokes the step from a shell, where the job console is the process
log and aborting means raising out to the entry point.
"""

import logging
import os
from pathlib import Path
from typing import Mapping, NoReturn, Optional

from ..application.domain import JobControl, ProgressSink, SecretProvider
from ..application.exceptions import JobAbortedError

WORKSPACE_VAR = "WORKSPACE"


class StaticSecret(SecretProvider):
    """A token held in memory, masked in every textual representation."""

    def __init__(self, token: Optional[str]):
        self._token = token or ""

    def reveal(self) -> str:
        return self._token

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('****')"

    __str__ = __repr__


class LoggerSink(ProgressSink):
    """Writes job progress lines to a standard library logger."""

    def __init__(self, name: str = "sweagle.job"):
        self.logger = logging.getLogger(name)

    def info(self, message: str):
        self.logger.info(message)

    def debug(self, message: str):
        self.logger.debug(message)

    def error(self, message: str):
        self.logger.error(message)


class RaisingJobControl(JobControl):
    """Aborts the job by raising JobAbortedError up to the entry point."""

    def abort(
        self, message: str, cause: Optional[BaseException] = None
    ) -> NoReturn:
        raise JobAbortedError(message) from cause


def workspace_root(env: Mapping[str, str] = os.environ) -> Path:
    """Resolves the job workspace, falling back to the working directory."""
    return Path(env.get(WORKSPACE_VAR) or os.getcwd())
