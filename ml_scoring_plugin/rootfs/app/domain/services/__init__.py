"""Domain services for the scoring plugin.

Services contain pure business logic and operate on value objects.
"""

from .dependency_installer import DependencyInstaller
from .version_resolver import NoCompatibleVersionError, VersionResolver

__all__ = [
    "DependencyInstaller",
    "NoCompatibleVersionError",
    "VersionResolver",
]
