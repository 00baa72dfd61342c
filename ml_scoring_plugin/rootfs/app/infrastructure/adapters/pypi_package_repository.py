"""PyPI package repository adapter.

Infrastructure adapter that implements IPackageRepository using the JSON
API of a PyPI-compatible index and pip for installation.

Note: This adapter uses the synchronous requests library. The methods are
declared async to match the interface and run one after another during
plugin startup.
"""

import logging
import platform
import subprocess
import sys
from typing import Any

import requests
from domain.interfaces import (
    IPackageRepository,
    OutputSink,
    PackageInstallError,
    RepositoryUnavailableError,
)
from domain.value_objects import PackageDescriptor
from packaging.requirements import InvalidRequirement, Requirement
from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion, Version

_LOGGER = logging.getLogger(__name__)


class PyPIPackageRepository(IPackageRepository):
    """PyPI JSON API implementation of the package repository.

    A version is compatible when its declared constraints on the base
    toolkit and on the interpreter accept the running versions. A version
    that declares no constraint on the base toolkit is compatible with any
    toolkit version.
    """

    def __init__(
        self,
        base_distribution: str,
        base_version: str,
        index_url: str = "https://pypi.org",
        timeout: int = 30,
        python_version: str | None = None,
    ) -> None:
        """Initialize the PyPI package repository.

        Args:
            base_distribution: Distribution name of the base toolkit
            base_version: Running version of the base toolkit
            index_url: Base URL of the index
            timeout: Request timeout in seconds
            python_version: Interpreter version to check against
                (defaults to the running interpreter)
        """
        self._base_name = canonicalize_name(base_distribution)
        self._base_version = Version(base_version)
        self._index_url = index_url.rstrip("/")
        self._timeout = timeout
        self._python_version = Version(python_version or platform.python_version())

        _LOGGER.info(
            "Package repository initialized with URL: %s (%s %s)",
            self._index_url,
            base_distribution,
            base_version,
        )

    async def list_versions(self, package_name: str) -> tuple[str, ...]:
        """List stable, non-yanked release versions, newest first.

        Releases with no files, all files yanked, a version string that does
        not parse, or a pre-release or dev version are left out, as pip does
        by default.
        """
        data = self._get_json(f"{self._index_url}/pypi/{package_name}/json")
        releases = data.get("releases")
        if not isinstance(releases, dict):
            raise RepositoryUnavailableError(
                f"Malformed release listing for {package_name}"
            )

        versions = []
        for version, files in releases.items():
            if not files or all(f.get("yanked", False) for f in files):
                continue
            try:
                parsed = Version(version)
            except InvalidVersion:
                _LOGGER.debug("Skipping unparseable version %s of %s", version, package_name)
                continue
            if parsed.is_prerelease:
                _LOGGER.debug("Skipping pre-release %s of %s", version, package_name)
                continue
            versions.append(parsed)

        return tuple(str(v) for v in sorted(versions, reverse=True))

    async def get_metadata(self, package_name: str, version: str) -> PackageDescriptor:
        data = self._get_json(f"{self._index_url}/pypi/{package_name}/{version}/json")
        info = data.get("info")
        if not isinstance(info, dict):
            raise RepositoryUnavailableError(
                f"Malformed metadata for {package_name} {version}"
            )

        requires_python = info.get("requires_python") or None
        requires_toolkit = self._toolkit_constraint(info.get("requires_dist") or [])

        return PackageDescriptor(
            name=info.get("name") or package_name,
            version=info.get("version") or version,
            compatible=self._is_compatible(requires_toolkit, requires_python),
            requires_toolkit=requires_toolkit,
            requires_python=requires_python,
        )

    async def install(
        self, package_name: str, version: str, output_sink: OutputSink
    ) -> None:
        """Install a package version with pip, streaming its output."""
        command = [
            sys.executable,
            "-m",
            "pip",
            "install",
            "--index-url",
            f"{self._index_url}/simple",
            f"{package_name}=={version}",
        ]
        _LOGGER.debug("Running: %s", " ".join(command))

        try:
            with subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            ) as process:
                for line in process.stdout:
                    output_sink(line.rstrip())
                return_code = process.wait()
        except OSError as e:
            raise PackageInstallError(f"Failed to run pip for {package_name}: {e}") from e

        if return_code != 0:
            raise PackageInstallError(
                f"pip exited with code {return_code} installing {package_name}=={version}"
            )

    def _get_json(self, url: str) -> dict[str, Any]:
        try:
            response = requests.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            _LOGGER.error("Package repository error: %s", e)
            raise RepositoryUnavailableError(f"Request to {url} failed: {e}") from e

        if response.status_code != 200:
            raise RepositoryUnavailableError(
                f"Request to {url} returned status {response.status_code}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise RepositoryUnavailableError(f"Invalid JSON from {url}: {e}") from e

    def _toolkit_constraint(self, requires_dist: list[str]) -> str | None:
        """Return the specifier a package places on the base toolkit, if any.

        Requirements guarded by an extra or by a marker that does not apply
        to the running environment are ignored.
        """
        for raw in requires_dist:
            try:
                requirement = Requirement(raw)
            except InvalidRequirement:
                _LOGGER.debug("Ignoring unparseable requirement %r", raw)
                continue
            if canonicalize_name(requirement.name) != self._base_name:
                continue
            if requirement.marker is not None and not requirement.marker.evaluate(
                {"extra": ""}
            ):
                continue
            return str(requirement.specifier)
        return None

    def _is_compatible(
        self, requires_toolkit: str | None, requires_python: str | None
    ) -> bool:
        try:
            if requires_python and not SpecifierSet(requires_python).contains(
                self._python_version, prereleases=True
            ):
                return False
            if requires_toolkit and not SpecifierSet(requires_toolkit).contains(
                self._base_version, prereleases=True
            ):
                return False
        except InvalidSpecifier as e:
            _LOGGER.debug("Treating invalid constraint as incompatible: %s", e)
            return False
        return True
