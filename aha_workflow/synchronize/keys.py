"""Contains logic for finding tracker item keys in pull request titles."""

import re

import structlog

from aha_workflow.synchronize.models import TrackerItemKind, TrackerItemRef

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

# The requirement pattern refines the feature pattern, so it is tried first.
REQUIREMENT_KEY_PATTERN = re.compile(r"[A-Z]+-\d+-\d+")
FEATURE_KEY_PATTERN = re.compile(r"[A-Z]+-\d+")


def extract_tracker_item_ref(title: str) -> TrackerItemRef | None:
    """Parse the tracker item reference at the start of a pull request title.

    Titles such as ``HIVE-6-12 add auth`` refer to a requirement, while
    ``HIVE-6 add auth`` refers to a feature. Titles that do not start with a
    key return None.
    """
    title = title.strip()

    match = REQUIREMENT_KEY_PATTERN.match(title)
    if match:
        return TrackerItemRef(kind=TrackerItemKind.REQUIREMENT, key=match.group(0))

    match = FEATURE_KEY_PATTERN.match(title)
    if match:
        return TrackerItemRef(kind=TrackerItemKind.FEATURE, key=match.group(0))

    logger.debug("No tracker item key found in pull request title", title=title)
    return None
