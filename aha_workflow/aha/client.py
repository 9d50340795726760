"""Aha! REST API client built on httpx."""

from typing import Any, Self

import httpx
import structlog
from pydantic import ValidationError

from aha_workflow.aha.abc import TrackerClientBase
from aha_workflow.aha.exceptions import ApplyFailure, FetchFailure, TrackerFailureReason
from aha_workflow.aha.models import LINKED_PULL_REQUEST_FIELD_KEY, FeatureRoot, RequirementRoot, TrackerItemSnapshot
from aha_workflow.synchronize.models import TrackerItemKind, TrackerItemRef, UpdatePatch

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

AHA_REQUEST_TIMEOUT_SECONDS = 50.0
AHA_USER_AGENT = "aha-workflow (Python aha api v1)"


def aha_api_base_url(domain: str) -> str:
    """Return the REST API base URL for an Aha! account subdomain."""
    return f"https://{domain}.aha.io/api/v1"


def item_path(ref: TrackerItemRef) -> str:
    """Return the API path of a tracker item."""
    match ref.kind:
        case TrackerItemKind.FEATURE:
            return f"/features/{ref.key}"
        case TrackerItemKind.REQUIREMENT:
            return f"/requirements/{ref.key}"


def parse_item_payload(kind: TrackerItemKind, content: bytes) -> TrackerItemSnapshot:
    """Parse a response body into a snapshot. Raises ValidationError on bad payloads."""
    match kind:
        case TrackerItemKind.FEATURE:
            return FeatureRoot.model_validate_json(content).feature
        case TrackerItemKind.REQUIREMENT:
            return RequirementRoot.model_validate_json(content).requirement


def serialize_patch(kind: TrackerItemKind, patch: UpdatePatch) -> dict[str, Any]:
    """Serialize a patch into the request body expected by Aha!, omitting unset fields."""
    fields: dict[str, Any] = {}
    if patch.assignee is not None:
        fields["assigned_to_user"] = patch.assignee
    if patch.linked_pr_field is not None:
        fields["custom_fields"] = {LINKED_PULL_REQUEST_FIELD_KEY: patch.linked_pr_field}
    if patch.workflow_status is not None:
        fields["workflow_status"] = {"name": patch.workflow_status}
    return {kind.value: fields}


class AhaClient(TrackerClientBase):
    """Tracker client for the Aha! REST API."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the tracker client with an already-configured httpx client."""
        self.client = client

    @classmethod
    def create(cls, domain: str, token: str, timeout: float = AHA_REQUEST_TIMEOUT_SECONDS) -> Self:
        """Create a client authenticated with an Aha! API token."""
        logger.info("Creating client for Aha! account", domain=domain)
        client = httpx.AsyncClient(
            base_url=aha_api_base_url(domain),
            headers={
                "Authorization": f"Bearer {token}",
                "User-Agent": AHA_USER_AGENT,
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=timeout,
        )
        return cls(client)

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def fetch_item(self, ref: TrackerItemRef) -> TrackerItemSnapshot:
        """Fetch a feature or requirement."""
        logger.debug("Fetching tracker item", kind=ref.kind.value, key=ref.key)
        try:
            response = await self.client.get(item_path(ref))
        except httpx.HTTPError as exc:
            raise FetchFailure(ref, TrackerFailureReason.TRANSPORT, str(exc)) from exc

        if response.status_code == 404:
            raise FetchFailure(ref, TrackerFailureReason.NOT_FOUND, "record does not exist")
        if not response.is_success:
            raise FetchFailure(ref, TrackerFailureReason.TRANSPORT, f"HTTP {response.status_code}")

        try:
            return parse_item_payload(ref.kind, response.content)
        except ValidationError as exc:
            logger.debug("Unparsable tracker payload", kind=ref.kind.value, key=ref.key, body=response.text)
            raise FetchFailure(ref, TrackerFailureReason.UNPARSABLE, str(exc)) from exc

    async def apply_patch(self, ref: TrackerItemRef, patch: UpdatePatch) -> TrackerItemSnapshot:
        """Write a patch to a feature or requirement."""
        body = serialize_patch(ref.kind, patch)
        logger.debug("Updating tracker item", kind=ref.kind.value, key=ref.key, body=body)
        try:
            response = await self.client.put(item_path(ref), json=body)
        except httpx.HTTPError as exc:
            raise ApplyFailure(ref, TrackerFailureReason.TRANSPORT, str(exc)) from exc

        if not response.is_success:
            raise ApplyFailure(ref, TrackerFailureReason.TRANSPORT, f"HTTP {response.status_code}: {response.text}")

        try:
            return parse_item_payload(ref.kind, response.content)
        except ValidationError as exc:
            raise ApplyFailure(ref, TrackerFailureReason.UNPARSABLE, str(exc)) from exc
