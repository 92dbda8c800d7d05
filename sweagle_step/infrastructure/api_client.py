"""HTTP implementation of the ConfigService port."""

from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from ..application.domain import *
from ..application.exceptions import MalformedResponseError, TransportError

from .api_models import ValidationReport
from .base_client import BaseClient
from .query import service_query

_VALIDATE_ENDPOINT = "/api/v1/data/include/validate"
_UPLOAD_ENDPOINT = "/api/v1/data/bulk-operations/dataLoader/upload"
_SNAPSHOT_ENDPOINT = "/api/v1/data/include/snapshot/byname"
_EXPORT_ENDPOINT = "/api/v1/tenant/metadata-parser/parse"

_JSON_ACCEPT = "application/json;charset=UTF-8"
_ANY_ACCEPT = "*/*"


class HttpConfigService(BaseClient, ConfigService):
    """A ConfigService that talks to a Sweagle tenant over its REST API."""

    async def _execute(
        self,
        method: str,
        url: str,
        endpoint: ServiceEndpoint,
        accept: str = _ANY_ACCEPT,
        headers: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> httpx.Response:
        """
        Executes one raw HTTP exchange and returns the fully read response.

        Raises:
            TransportError: On connection failure, timeout or a non-2xx status.
        """
        request_headers = {"Accept": accept, **self._auth_headers(endpoint)}
        if headers:
            request_headers.update(headers)

        try:
            response = await self.client.request(
                method, url, headers=request_headers, **kwargs
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"{method} {e.request.url.path} returned "
                f"{e.response.status_code}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"{method} {httpx.URL(url).path} failed: "
                f"{type(e).__name__}: {e}"
            ) from e

        return response

    def _extract_result(self, body: str) -> ValidationResult:
        """Validates a raw report and maps its summary to a domain model."""
        try:
            report = ValidationReport.model_validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Malformed validation response: expected integer "
                f"summary.errors and summary.warnings ({e.error_count()} "
                f"problem(s): {e.errors()[0]['msg']})"
            ) from e

        return ValidationResult(
            errors=report.summary.errors,
            warnings=report.summary.warnings,
            body=body,
        )

    async def validate(
        self, endpoint: ServiceEndpoint, request: ValidationRequest
    ) -> ValidationResult:
        """
        Runs all validators of an MDS, including custom ones.

        Raises:
            TransportError: If the exchange fails.
            MalformedResponseError: If the report has no usable summary.
        """
        params = {
            "name": request.mds_name,
            "forIncoming": request.for_incoming,
            "withCustomValidations": request.with_custom_validations,
        }
        self.logger.debug(f"Validating {request.mds_name}...")

        response = await self._execute(
            "GET",
            endpoint.url_for(_VALIDATE_ENDPOINT),
            endpoint,
            accept=_JSON_ACCEPT,
            params=params,
        )
        return self._extract_result(response.text)

    async def upload(
        self, endpoint: ServiceEndpoint, request: UploadRequest
    ) -> str:
        params = {
            "nodePath": request.node_path,
            "format": request.format,
            "allowDelete": request.allow_delete,
            "autoApprove": request.auto_approve,
            "storeSnapshotResults": request.store_snapshot_results,
            "validationLevel": request.validation_level,
        }
        self.logger.debug(
            f"Uploading {len(request.content)} characters to {request.node_path}"
        )

        response = await self._execute(
            "POST",
            endpoint.url_for(_UPLOAD_ENDPOINT),
            endpoint,
            headers={"Content-Type": "text/plain"},
            params=params,
            content=request.content.encode("utf-8"),
        )
        return response.text

    async def snapshot(
        self, endpoint: ServiceEndpoint, request: SnapshotRequest
    ) -> str:
        # Built by hand: `params=` would turn spaces in description/tag into '+'.
        query = service_query({
            "name": request.mds_name,
            "level": request.level,
            "description": request.description,
            "tag": request.tag,
        })
        url = f"{endpoint.url_for(_SNAPSHOT_ENDPOINT)}?{query}"

        response = await self._execute("POST", url, endpoint, content=b"")
        return response.text

    async def export(
        self, endpoint: ServiceEndpoint, request: ExportRequest
    ) -> ServiceResponse:
        """Renders an MDS with a server-side exporter (metadata parser)."""
        form = {
            "mds": request.mds_name,
            "parser": request.exporter,
            "args": request.args,
            "format": request.format,
        }

        response = await self._execute(
            "POST",
            endpoint.url_for(_EXPORT_ENDPOINT),
            endpoint,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data=form,
        )
        return ServiceResponse(content=response.content, text=response.text)
