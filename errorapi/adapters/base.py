"""
errorapi.adapters.base
───────────────────────
Contract between the error API and an integration. The error API calls
``on_create`` once for every stored error event.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from errorapi.models import ErrorEvent


class BaseIntegrationAdapter(ABC):
    """Forwards newly created error events to an external service."""

    @abstractmethod
    def on_create(self, event: ErrorEvent) -> bool:
        """
        Forward *event*. Returns True when the remote service accepted it.
        May raise IntegrationError when the integration itself is unusable.
        """

    def close(self) -> None:
        """Release resources held by the adapter."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
