"""Pydantic models for the subset of Aha! API payloads used by the workflow."""

from typing import Any

from pydantic import BaseModel, ConfigDict

LINKED_PULL_REQUEST_FIELD_NAME = "Pull Request"
"""Display name of the custom field holding the linked pull request URL."""

LINKED_PULL_REQUEST_FIELD_KEY = "pull_request"
"""API key of the custom field holding the linked pull request URL."""


class AssignedToUser(BaseModel):
    """Pydantic model for the user a record is assigned to."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    email: str | None = None


class CustomField(BaseModel):
    """Pydantic model for an Aha! custom field value."""

    model_config = ConfigDict(extra="ignore")

    name: str
    key: str | None = None
    value: Any = None

    def has_value(self) -> bool:
        """Return True if the field holds a non-empty value."""
        if self.value is None:
            return False
        if isinstance(self.value, str):
            return self.value.strip() != ""
        if isinstance(self.value, (list, dict)):
            return len(self.value) > 0
        return True


class WorkflowStatus(BaseModel):
    """Pydantic model for an Aha! workflow status."""

    model_config = ConfigDict(extra="ignore")

    name: str
    id: str | None = None
    complete: bool | None = None


class TrackerItemSnapshot(BaseModel):
    """Server-side state of a feature or requirement at fetch time."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str
    reference_num: str | None = None
    name: str | None = None
    assigned_to_user: AssignedToUser | None
    workflow_status: WorkflowStatus
    custom_fields: list[CustomField]

    @property
    def assignee(self) -> str | None:
        """Email (or name) of the assigned user, if any."""
        if self.assigned_to_user is None:
            return None
        return self.assigned_to_user.email or self.assigned_to_user.name or self.assigned_to_user.id

    @property
    def workflow_status_name(self) -> str:
        """Name of the current workflow status."""
        return self.workflow_status.name

    def has_custom_field_value(self, name: str) -> bool:
        """Return True if any custom field with the given display name is filled in."""
        return any(field.name == name and field.has_value() for field in self.custom_fields)


class FeatureRoot(BaseModel):
    """Envelope returned by the features endpoint."""

    feature: TrackerItemSnapshot


class RequirementRoot(BaseModel):
    """Envelope returned by the requirements endpoint."""

    requirement: TrackerItemSnapshot
