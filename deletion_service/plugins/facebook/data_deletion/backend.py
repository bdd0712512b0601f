"""Deletion backends: the collaborators that actually erase a subject's data."""

import asyncio
from collections.abc import Iterable, Sequence
from typing import Protocol, runtime_checkable

from structlog import get_logger

from deletion_service.plugins.facebook.data_deletion.models import DeletionOutcome

logger = get_logger(__name__)

# (store, seconds) pairs, run in order.
DEFAULT_SIMULATION_STEPS: tuple[tuple[str, float], ...] = (
    ("profile", 1.0),
    ("orders", 0.5),
    ("preferences", 0.5),
)
FINALIZE_DELAY = 0.3


@runtime_checkable
class DeletionBackend(Protocol):
    """Locates and purges every stored record of a subject.

    Implementations must be atomic from the caller's point of view: an
    outcome with ``success=False`` (or a raised exception) means the
    deletion as a whole failed, whatever was cleared on the way.
    """

    async def delete_all_data(self, subject_id: str) -> DeletionOutcome: ...


class SimulatedDeletionBackend:
    """Stand-in backend that pretends to clear a few stores one after another."""

    def __init__(
        self,
        delay_scale: float = 1.0,
        failing_subjects: Iterable[str] = (),
        steps: Sequence[tuple[str, float]] = DEFAULT_SIMULATION_STEPS,
    ):
        self.delay_scale = delay_scale
        self.failing_subjects = frozenset(failing_subjects)
        self.steps = tuple(steps)

    async def _pause(self, seconds: float) -> None:
        delay = seconds * self.delay_scale
        if delay > 0:
            await asyncio.sleep(delay)

    async def delete_all_data(self, subject_id: str) -> DeletionOutcome:
        logger.info("[SIMULATION] Deleting data for subject", subject_id=subject_id)
        cleared: list[str] = []

        for store, seconds in self.steps:
            await self._pause(seconds)
            if subject_id in self.failing_subjects:
                logger.warning(
                    "[SIMULATION] Store refused deletion",
                    subject_id=subject_id,
                    store=store,
                )
                return DeletionOutcome(
                    subject_id=subject_id,
                    success=False,
                    stores_cleared=cleared,
                    error=f"simulated failure while clearing {store}",
                )
            cleared.append(store)
            logger.info("[SIMULATION] Deleted store", subject_id=subject_id, store=store)

        await self._pause(FINALIZE_DELAY)
        logger.info("[SIMULATION] Data deletion completed", subject_id=subject_id)
        return DeletionOutcome(subject_id=subject_id, success=True, stores_cleared=cleared)
