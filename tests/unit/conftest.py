"""Fixtures for unit tests."""

from typing import Callable, Generator

import pytest
import structlog

from aha_workflow.aha.models import TrackerItemSnapshot
from aha_workflow.synchronize.models import PullRequestModel


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


def make_snapshot(
    assignee: str | None = None,
    status: str = "Ready to develop",
    custom_fields: list[dict[str, object]] | None = None,
    url: str = "https://acme.aha.io/features/FEAT-9",
) -> TrackerItemSnapshot:
    """Build a tracker snapshot from the fields the workflow cares about."""
    return TrackerItemSnapshot.model_validate(
        {
            "url": url,
            "assigned_to_user": None if assignee is None else {"id": "1", "name": assignee, "email": f"{assignee}@example.com"},
            "workflow_status": {"id": "10", "name": status},
            "custom_fields": custom_fields or [],
        }
    )


@pytest.fixture
def snapshot_factory() -> Callable[..., TrackerItemSnapshot]:
    """Return a factory for tracker snapshots."""
    return make_snapshot


@pytest.fixture
def pull_request() -> PullRequestModel:
    """Return an open pull request that references a feature."""
    return PullRequestModel(
        id=42,
        title="FEAT-9: add retries",
        url="https://github.com/acme/widgets/pull/42",
        labels=("Needs code review",),
    )
