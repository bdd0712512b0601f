"""Service layer for the Facebook data deletion callback."""

from typing import Annotated

from fastapi import Depends
from structlog import get_logger

from deletion_service.plugins.facebook.data_deletion.backend import DeletionBackend
from deletion_service.plugins.facebook.data_deletion.models import (
    DeletionConfirmation,
    DeletionOutcome,
    DeletionRequest,
)
from deletion_service.utils.dependencies import get_deletion_backend
from deletion_service.utils.exceptions import (
    DeletionError,
    ServiceError,
    UnexpectedError,
    ValidationError,
)

logger = get_logger(__name__)


class DataDeletionService:
    """Runs one deletion callback: validate, delete, confirm."""

    def __init__(self, backend: DeletionBackend):
        self.backend = backend

    async def handle(
        self, request: DeletionRequest | None, request_url: str
    ) -> DeletionConfirmation:
        """
        Delete all data of the subject named in ``request`` and build the
        confirmation Facebook expects.

        Args:
            request: The decoded callback body, or None if there was none.
            request_url: The full URL the callback arrived on.

        Returns:
            The confirmation echoing ``challenge`` verbatim.

        Raises:
            ValidationError: ``user_id`` or ``challenge`` is missing or empty.
            DeletionError: The backend failed or raised.
            UnexpectedError: Anything else went wrong.
        """
        try:
            user_id, challenge = self._validate(request)

            await self._delete(user_id)

            confirmation = DeletionConfirmation(
                url=request_url, confirmation_code=challenge
            )
            logger.info(
                "Sending deletion confirmation",
                user_id=user_id,
                url=confirmation.url,
            )
            return confirmation

        except ServiceError:
            raise
        except Exception as e:
            logger.error(
                "Unexpected error in data deletion callback",
                error=str(e),
                exc_info=True,
            )
            raise UnexpectedError() from e

    @staticmethod
    def _validate(request: DeletionRequest | None) -> tuple[str, str]:
        if request is None or not request.user_id or not request.challenge:
            logger.warning(
                "Rejected deletion request with missing fields",
                has_user_id=bool(request and request.user_id),
                has_challenge=bool(request and request.challenge),
            )
            raise ValidationError()
        return request.user_id, request.challenge

    async def _delete(self, user_id: str) -> DeletionOutcome:
        logger.info("Starting data deletion", user_id=user_id)
        try:
            outcome = await self.backend.delete_all_data(user_id)
        except Exception as e:
            logger.error(
                "Error during data deletion",
                user_id=user_id,
                error=str(e),
                exc_info=True,
            )
            raise DeletionError() from e

        if not outcome.success:
            logger.error(
                "Deletion backend reported failure",
                user_id=user_id,
                stores_cleared=outcome.stores_cleared,
                error=outcome.error,
            )
            raise DeletionError()

        logger.info(
            "Data deletion completed",
            user_id=user_id,
            stores_cleared=outcome.stores_cleared,
        )
        return outcome


def get_data_deletion_service(
    backend: Annotated[DeletionBackend, Depends(get_deletion_backend)],
) -> DataDeletionService:
    return DataDeletionService(backend)
