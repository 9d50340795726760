"""Contains the policy that maps pull request labels to Aha! workflow statuses."""

from collections.abc import Mapping, Sequence
from types import MappingProxyType

import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

DEFAULT_LABEL_STATUSES: Mapping[str, str] = MappingProxyType(
    {
        "In development": "In development",
        "Needs code review": "In code review",
        "Needs PM review": "In PM review",
        "Ready": "Ready to ship",
    }
)
"""Built-in label to workflow status table, consulted after any overrides."""


def lookup_label_status(label: str, overrides: Mapping[str, str] | None = None) -> str | None:
    """Look up the workflow status for a single label, preferring overrides."""
    if overrides is not None and label in overrides:
        return overrides[label]
    return DEFAULT_LABEL_STATUSES.get(label)


def map_labels_to_status(labels: Sequence[str], overrides: Mapping[str, str] | None = None) -> str | None:
    """Map a pull request's labels to a workflow status.

    Matching statuses are collected in label order. The first match is
    discarded and the second one is returned; with fewer than two matches no
    status is mapped.
    """
    hits = [status for status in (lookup_label_status(label, overrides) for label in labels) if status is not None]
    logger.debug("Matched label statuses", labels=list(labels), hits=hits)
    if len(hits) < 2:
        return None
    return hits[1]
