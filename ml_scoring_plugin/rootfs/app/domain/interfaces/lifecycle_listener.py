"""Host lifecycle listener interface.

Contract for hooks the hosting environment calls around its lifetime.
"""

from abc import ABC, abstractmethod


class ILifecycleListener(ABC):
    """Contract for environment lifecycle hooks."""

    @abstractmethod
    def on_init(self) -> None:
        """Called once by the host before any pipeline using the plugin runs."""
        pass

    @abstractmethod
    def on_shutdown(self) -> None:
        """Called once by the host at teardown."""
        pass
