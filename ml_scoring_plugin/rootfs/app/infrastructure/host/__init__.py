"""Host integration for the scoring plugin."""

from .plugin import create_lifecycle_listener, create_scoring_service, on_init, on_shutdown

__all__ = [
    "create_lifecycle_listener",
    "create_scoring_service",
    "on_init",
    "on_shutdown",
]
