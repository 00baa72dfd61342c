"""Installed package registry interface.

Contract for inspecting and loading packages installed in the running
environment.
"""

from abc import ABC, abstractmethod

from domain.value_objects import PackageDescriptor


class IInstalledPackageRegistry(ABC):
    """Contract for installed package lookups."""

    @abstractmethod
    def get_installed_info(self, package_name: str) -> PackageDescriptor | None:
        """Look up an installed package.

        Args:
            package_name: Package identifier

        Returns:
            Descriptor with installed_version set, or None if not installed
        """
        pass

    @abstractmethod
    def get_base_version(self) -> str:
        """Return the version of the running base toolkit."""
        pass

    @abstractmethod
    def load_all(self, verbose: bool = False) -> int:
        """Load every installed extension package.

        Args:
            verbose: Log each extension as it is loaded

        Returns:
            Number of extensions loaded
        """
        pass
