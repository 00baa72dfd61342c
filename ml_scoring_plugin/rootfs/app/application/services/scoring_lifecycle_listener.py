"""Scoring plugin lifecycle listener.

Application service the hosting environment calls at startup and teardown.
"""

import asyncio
import logging
import sys
from concurrent.futures import ThreadPoolExecutor

from domain.interfaces import ILifecycleListener
from domain.services import DependencyInstaller
from domain.value_objects import InstallerConfig, InstallStatus, PackageOutcome

_LOGGER = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: InstallerConfig) -> None:
    """Send log output to the configured sink.

    Only the console sink exists. The root logger is configured once per
    process; later calls leave an existing configuration alone.
    """
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )


class ScoringLifecycleListener(ILifecycleListener):
    """Lifecycle hook that prepares the environment for scoring.

    On init it configures logging, then makes sure the configured extension
    packages are installed. Startup never fails because of a package; the
    per-package outcomes are kept for the host to inspect.
    """

    def __init__(
        self,
        config: InstallerConfig,
        installer: DependencyInstaller,
    ) -> None:
        """Initialize the lifecycle listener.

        Args:
            config: Plugin startup configuration
            installer: Dependency installer service
        """
        self._config = config
        self._installer = installer
        self._outcomes: tuple[PackageOutcome, ...] = ()
        self._initialized = False

    @property
    def toolkit_archive_hint(self) -> str:
        """Filename a distributed engine uses to locate the toolkit archive."""
        return self._config.toolkit_archive_hint

    @property
    def outcomes(self) -> tuple[PackageOutcome, ...]:
        return self._outcomes

    @property
    def failures(self) -> tuple[PackageOutcome, ...]:
        return tuple(o for o in self._outcomes if o.status is InstallStatus.FAILED)

    def on_init(self) -> None:
        if self._initialized:
            _LOGGER.debug("Lifecycle listener already initialized")
            return
        self._initialized = True

        configure_logging(self._config)
        _LOGGER.info(
            "Initializing scoring plugin (log sink: %s, toolkit archive: %s)",
            self._config.log_sink,
            self._config.toolkit_archive_hint,
        )

        try:
            self._outcomes = self._run_installer()
        except Exception as e:
            _LOGGER.error("Extension package check failed: %s", e)
            return

        if self.failures:
            _LOGGER.warning(
                "%d of %d extension packages could not be installed: %s",
                len(self.failures),
                len(self._outcomes),
                ", ".join(o.name for o in self.failures),
            )

    def on_shutdown(self) -> None:
        pass

    def _run_installer(self) -> tuple[PackageOutcome, ...]:
        """Run the installer to completion from synchronous host code.

        A host that already runs an event loop on this thread gets the
        installer run on a worker thread with its own loop.
        """
        packages = self._config.packages
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self._installer.ensure_installed(packages))

        with ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(
                asyncio.run, self._installer.ensure_installed(packages)
            ).result()
