"""Installed package registry adapter.

Infrastructure adapter that implements IInstalledPackageRegistry using the
running interpreter's distribution metadata.
"""

import logging
from importlib import metadata

from domain.interfaces import IInstalledPackageRegistry
from domain.value_objects import PackageDescriptor

_LOGGER = logging.getLogger(__name__)

EXTENSION_ENTRY_POINT_GROUP = "ml_scoring_plugin.extensions"


class ImportlibPackageRegistry(IInstalledPackageRegistry):
    """Registry backed by importlib.metadata.

    Extensions are the entry points published in the
    ml_scoring_plugin.extensions group by installed distributions.
    """

    def __init__(
        self,
        base_distribution: str = "scikit-learn",
        entry_point_group: str = EXTENSION_ENTRY_POINT_GROUP,
    ) -> None:
        """Initialize the registry.

        Args:
            base_distribution: Distribution name of the base toolkit
            entry_point_group: Entry point group extensions register under
        """
        self._base_distribution = base_distribution
        self._entry_point_group = entry_point_group
        self._loaded: dict[str, object] = {}

    def get_installed_info(self, package_name: str) -> PackageDescriptor | None:
        try:
            installed_version = metadata.version(package_name)
        except metadata.PackageNotFoundError:
            return None
        return PackageDescriptor(
            name=package_name,
            version=installed_version,
            installed_version=installed_version,
            compatible=True,
        )

    def get_base_version(self) -> str:
        return metadata.version(self._base_distribution)

    @property
    def loaded_extensions(self) -> dict[str, object]:
        return dict(self._loaded)

    def load_all(self, verbose: bool = False) -> int:
        """Load every extension entry point not loaded yet.

        An extension that fails to load is logged and skipped.

        Returns:
            Number of extensions loaded by this call
        """
        count = 0
        for entry_point in metadata.entry_points(group=self._entry_point_group):
            if entry_point.name in self._loaded:
                continue
            try:
                self._loaded[entry_point.name] = entry_point.load()
            except Exception as e:
                _LOGGER.error("Failed to load extension %s: %s", entry_point.name, e)
                continue
            count += 1
            if verbose:
                _LOGGER.info("Loaded extension %s (%s)", entry_point.name, entry_point.value)
        return count
