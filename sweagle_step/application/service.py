"""
The core application service, containing pure business logic.

ConfigStepService runs the four build-step operations against a ConfigService
port and applies the two-level failure policy: with `mark_failed` set, any
failure condition aborts the job through the JobControl port; without it the
condition is reported on the progress sink and the operation returns a
best-effort result (possibly None).
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from .domain import *
from .exceptions import (
    ConfigurationError,
    FileSystemError,
    MalformedResponseError,
    SweagleStepError,
    ThresholdExceededError,
    TransportError,
)


class ConfigStepService:
    """Orchestrates validate/upload/snapshot/export steps for one job."""

    def __init__(
        self,
        config_service: ConfigService,
        sink: ProgressSink,
        job: JobControl,
        encoding: str = "utf-8",
    ):
        """Initializes the service with the remote port and host capabilities."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config_service = config_service
        self.sink = sink
        self.job = job
        self.encoding = encoding

    def _fail(self, error: SweagleStepError, mark_failed: bool):
        """Aborts the job or logs the error, depending on `mark_failed`."""
        if mark_failed:
            self.job.abort(str(error), cause=error)
        self.sink.error(str(error))

    @staticmethod
    def _exceeded_thresholds(result: ValidationResult, threshold: Threshold):
        """Lists exceeded thresholds, errors before warnings."""
        checks = (
            ("error", result.errors, threshold.err_max),
            ("warning", result.warnings, threshold.warn_max),
        )
        return [
            ThresholdExceededError(kind, count, limit)
            for kind, count, limit in checks
            if Threshold.exceeded_by(count, limit)
        ]

    async def validate_config(
        self,
        endpoint: ServiceEndpoint,
        mds_name: str,
        mark_failed: bool = True,
        warn_max: int = NO_LIMIT,
        err_max: int = NO_LIMIT,
        show_results: bool = False,
    ) -> Optional[str]:
        """
        Validates an MDS and enforces the error and warning thresholds.

        The error threshold is reported first; when it aborts the job the
        warning condition is never raised, so exactly one fatal condition
        surfaces. With `show_results` the report is dumped once, whichever
        thresholds were exceeded. A malformed report or a bad credential
        always aborts, regardless of `mark_failed`.

        Args:
            endpoint: The Sweagle tenant and credential.
            mds_name: Name of the MDS to validate.
            mark_failed: Abort the job on failures instead of logging them.
            warn_max: Maximum tolerated warnings, or -1 for no limit.
            err_max: Maximum tolerated errors, or -1 for no limit.
            show_results: Emit the full report at debug level when a
                threshold is exceeded.

        Returns:
            The raw validation report, or None if the exchange failed softly.

        Raises:
            JobAbortedError: If a failure condition is fatal.
        """

        self.sink.info(f"Checking MDS Validity: {mds_name}")
        threshold = Threshold(warn_max=warn_max, err_max=err_max)

        try:
            result = await self.config_service.validate(
                endpoint, ValidationRequest(mds_name=mds_name)
            )
        except (ConfigurationError, MalformedResponseError) as e:
            self._fail(e, mark_failed=True)
            return None
        except TransportError as e:
            self._fail(e, mark_failed)
            return None

        self.sink.info(
            f"{mds_name} contains {result.warnings} warnings "
            f"and {result.errors} errors"
        )

        exceeded = self._exceeded_thresholds(result, threshold)
        if exceeded and show_results:
            self.sink.debug(result.body)
        for error in exceeded:
            self._fail(error, mark_failed)

        return result.body

    def _read_workspace_file(self, path: Path) -> str:
        # Decoded from bytes so line endings reach the service untouched.
        try:
            return path.read_bytes().decode(self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise FileSystemError(f"Cannot read {path}: {e}") from e

    def _write_workspace_file(self, path: Path, content: bytes):
        try:
            path.write_bytes(content)
        except OSError as e:
            raise FileSystemError(f"Cannot write {path}: {e}") from e

    async def upload_config(
        self,
        endpoint: ServiceEndpoint,
        file_location: str,
        node_path: str,
        format: str,
        mark_failed: bool = True,
        workspace_root: Path = Path("."),
    ) -> Optional[str]:
        """
        Uploads a workspace file to a node of the Sweagle data tree.

        The file is read with the configured encoding and sent verbatim as a
        text/plain body.

        Returns:
            The service response, or None if the step failed softly.

        Raises:
            JobAbortedError: If reading or uploading fails and `mark_failed`
                is set.
        """

        self.sink.info(f"Uploading Config from {file_location} to {node_path}")

        try:
            content = await asyncio.to_thread(
                self._read_workspace_file, Path(workspace_root) / file_location
            )
            return await self.config_service.upload(
                endpoint,
                UploadRequest(node_path=node_path, format=format, content=content),
            )
        except ConfigurationError as e:
            self._fail(e, mark_failed=True)
            return None
        except (FileSystemError, TransportError) as e:
            self._fail(e, mark_failed)
            return None

    async def snapshot_config(
        self,
        endpoint: ServiceEndpoint,
        mds_name: str,
        description: str = "",
        tag: str = "",
        mark_failed: bool = True,
    ) -> Optional[str]:
        """Creates a snapshot from the pending data of an MDS."""

        self.sink.info(f"Creating Snapshot from pending data for {mds_name}")

        try:
            return await self.config_service.snapshot(
                endpoint,
                SnapshotRequest(mds_name=mds_name, description=description, tag=tag),
            )
        except ConfigurationError as e:
            self._fail(e, mark_failed=True)
            return None
        except TransportError as e:
            self._fail(e, mark_failed)
            return None

    async def export_config(
        self,
        endpoint: ServiceEndpoint,
        mds_name: str,
        file_location: str,
        exporter: str,
        args: str = "",
        format: str = "json",
        mark_failed: bool = True,
        workspace_root: Path = Path("."),
    ) -> Optional[str]:
        """
        Renders an MDS through a server-side exporter into a file.

        The response bytes are written as received, replacing any existing file.
        A relative `file_location` is resolved against the workspace root.
        When the exchange fails softly nothing is written.

        Returns:
            The rendered text, or None if the exchange failed softly.

        Raises:
            JobAbortedError: If exporting or writing fails and `mark_failed`
                is set.
        """

        self.sink.info(
            f"Exporting from {mds_name} with exporter {exporter} "
            f"in format {format} at {endpoint.base_url}"
        )
        destination = Path(workspace_root) / file_location

        try:
            response = await self.config_service.export(
                endpoint,
                ExportRequest(
                    mds_name=mds_name,
                    exporter=exporter,
                    args=args,
                    format=format,
                    destination=destination,
                ),
            )
        except ConfigurationError as e:
            self._fail(e, mark_failed=True)
            return None
        except TransportError as e:
            self._fail(e, mark_failed)
            return None

        try:
            await asyncio.to_thread(
                self._write_workspace_file, destination, response.content
            )
        except FileSystemError as e:
            self._fail(e, mark_failed)
        else:
            self.logger.info(
                f"Wrote {len(response.content)} bytes to {destination}"
            )

        return response.text
