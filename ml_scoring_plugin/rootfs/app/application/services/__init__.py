"""Application services for the scoring plugin.

These services orchestrate domain logic with infrastructure adapters
to fulfill use cases.
"""

from .scoring_lifecycle_listener import ScoringLifecycleListener, configure_logging
from .scoring_run_service import ScoringRunService

__all__ = [
    "ScoringLifecycleListener",
    "ScoringRunService",
    "configure_logging",
]
