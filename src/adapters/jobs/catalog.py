"""
HTTP job catalog adapter - Implements the JobsLister and JobGetterByID ports.

Forwards listing and lookup requests to the external recruitment API:

    GET {base_url}/api/recruitment/positions.json?description=&location=&full_time=&page=
    GET {base_url}/api/recruitment/positions/{uuid}

Only filters that are set are sent. Transport failures, error statuses
and undecodable bodies all surface as InternalError; the catalog's own
message is logged but never returned to callers.
"""

import logging
from typing import Any
from uuid import UUID

import httpx

from src.domain.exceptions import InternalError, ValidationFailed
from src.domain.ports import Job, JobsListOptions

logger = logging.getLogger(__name__)

POSITIONS_PATH = "api/recruitment/positions"


class HttpJobCatalog:
    """
    Implements JobsLister and JobGetterByID over httpx.

    Holds one connection-pooling client for its lifetime; call close()
    on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the catalog client.

        Args:
            base_url: Catalog root; any path on it is kept as a prefix
            timeout_seconds: Upper bound for connect, read and write
            transport: Replacement transport (tests pass httpx.MockTransport)
        """
        self._client = httpx.Client(base_url=base_url, timeout=timeout_seconds, transport=transport)

    def close(self) -> None:
        self._client.close()

    def list_jobs(self, options: JobsListOptions) -> list[Job]:
        """
        List catalog positions matching the given filters.

        Raises:
            InternalError: On transport failure, error status or bad payload
        """
        payload = self._get(f"{POSITIONS_PATH}.json", params=_query_params(options))
        if not isinstance(payload, list):
            raise InternalError("decoding jobs list: expected a JSON array")

        # The catalog pads short pages with nulls
        return [_job_from_payload(item) for item in payload if item is not None]

    def get_job_by_id(self, job_id: str) -> Job:
        """
        Fetch a single position.

        Raises:
            ValidationFailed: If job_id is not a UUID
            InternalError: On transport failure, error status or bad payload
        """
        try:
            parsed = UUID(job_id)
        except ValueError:
            raise ValidationFailed("job_id", "uuid") from None

        return _job_from_payload(self._get(f"{POSITIONS_PATH}/{parsed}"))

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.warning("Job catalog request to %s failed: %s", path, e)
            raise InternalError("doing http request") from e

        if response.status_code >= 400:
            logger.warning(
                "Job catalog returned %d for %s: %s",
                response.status_code,
                path,
                response.text[:200],
            )
            raise InternalError(f"http request returns {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise InternalError("unmarshalling body response from json") from e


def _query_params(options: JobsListOptions) -> dict[str, str]:
    params: dict[str, str] = {}
    if options.description:
        params["description"] = options.description
    if options.location:
        params["location"] = options.location
    if options.full_time:
        params["full_time"] = "true"
    if options.page > 0:
        params["page"] = str(options.page)
    return params


def _job_from_payload(item: Any) -> Job:
    if not isinstance(item, dict):
        raise InternalError("decoding job: expected a JSON object")

    try:
        job_id = UUID(str(item["id"]))
    except (KeyError, ValueError) as e:
        raise InternalError("decoding job id") from e

    def text(key: str) -> str:
        value = item.get(key)
        return "" if value is None else str(value)

    return Job(
        id=job_id,
        company=text("company"),
        company_url=text("company_url"),
        company_logo=text("company_logo"),
        url=text("url"),
        type=text("type"),
        location=text("location"),
        title=text("title"),
        description=text("description"),
        how_to_apply=text("how_to_apply"),
        created_at=text("created_at"),
    )
