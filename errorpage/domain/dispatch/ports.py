"""
Port interfaces (ABCs) for the dispatch bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional


class ErrorReporterPort(ABC):
    """Port for sending an exception to an error-tracking service."""

    @abstractmethod
    def report(self, exception: BaseException) -> Optional[str]:
        """Report an exception and return the tracker's identifier for it.

        The identifier is opaque: callers embed it in user-facing text
        and must not assume any format. ``None`` means the tracker did
        not assign one (e.g. it is disabled).

        Errors raised by the tracker are not caught here.
        """
        raise NotImplementedError
