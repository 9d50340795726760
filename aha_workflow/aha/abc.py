"""Base ABC for tracker clients."""

from abc import ABC, abstractmethod

from aha_workflow.aha.models import TrackerItemSnapshot
from aha_workflow.synchronize.models import TrackerItemRef, UpdatePatch


class TrackerClientBase(ABC):
    """Base ABC for tracker clients."""

    @abstractmethod
    async def fetch_item(self, ref: TrackerItemRef) -> TrackerItemSnapshot:
        """Fetch the current state of a tracker item.

        Raises:
            FetchFailure: If the item is missing, unreachable, or unparsable.
        """
        pass

    @abstractmethod
    async def apply_patch(self, ref: TrackerItemRef, patch: UpdatePatch) -> TrackerItemSnapshot:
        """Write a patch to a tracker item and return the updated state.

        Raises:
            ApplyFailure: If the write fails or the response is unparsable.
        """
        pass
