"""Per-application state shared with route handlers."""

import time
from dataclasses import dataclass, field

from deletion_service.config import AppConfig
from deletion_service.plugins.facebook.data_deletion.backend import DeletionBackend


@dataclass
class ServiceContext:
    """Everything a request handler may need that outlives a single request.

    Built once by ``create_app`` and stored on ``app.state.context``; tests
    construct their own instead of relying on module globals.
    """

    settings: AppConfig
    deletion_backend: DeletionBackend
    started_at: float = field(default_factory=time.monotonic)

    def uptime(self) -> float:
        """Seconds since the context was created, from a monotonic clock."""
        return time.monotonic() - self.started_at
