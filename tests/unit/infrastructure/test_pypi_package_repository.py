"""Unit tests for the PyPI package repository adapter."""

from unittest.mock import MagicMock, Mock, patch

import pytest
import requests
from domain.interfaces import PackageInstallError, RepositoryUnavailableError
from infrastructure.adapters.pypi_package_repository import PyPIPackageRepository


def json_response(payload: dict, status_code: int = 200) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


def release_files(yanked: bool = False) -> list[dict]:
    return [{"filename": "pkg.whl", "yanked": yanked}]


@pytest.fixture
def repository() -> PyPIPackageRepository:
    return PyPIPackageRepository(
        base_distribution="scikit-learn",
        base_version="1.5.2",
        index_url="https://pypi.example/",
        timeout=7,
        python_version="3.11.4",
    )


class TestListVersions:
    """Test release listings."""

    @pytest.mark.asyncio
    async def test_versions_are_newest_first(self, repository: PyPIPackageRepository) -> None:
        """Test that releases are returned newest first by version order."""
        payload = {
            "releases": {
                "0.9.0": release_files(),
                "0.10.1": release_files(),
                "0.10.0": release_files(),
            }
        }
        with patch(
            "infrastructure.adapters.pypi_package_repository.requests.get",
            return_value=json_response(payload),
        ) as mock_get:
            versions = await repository.list_versions("imbalanced-learn")

        assert versions == ("0.10.1", "0.10.0", "0.9.0")
        mock_get.assert_called_once_with(
            "https://pypi.example/pypi/imbalanced-learn/json", timeout=7
        )

    @pytest.mark.asyncio
    async def test_pre_and_dev_releases_skipped(
        self, repository: PyPIPackageRepository
    ) -> None:
        """Test that a newer release candidate never outranks a stable release."""
        payload = {
            "releases": {
                "1.0.0": release_files(),
                "2.0.0rc1": release_files(),
                "2.0.0b2": release_files(),
                "2.0.0.dev3": release_files(),
            }
        }
        with patch(
            "infrastructure.adapters.pypi_package_repository.requests.get",
            return_value=json_response(payload),
        ):
            assert await repository.list_versions("pkg") == ("1.0.0",)

    @pytest.mark.asyncio
    async def test_yanked_empty_and_invalid_releases_skipped(
        self, repository: PyPIPackageRepository
    ) -> None:
        payload = {
            "releases": {
                "2.0": release_files(yanked=True),
                "1.5": [],
                "not-a-version": release_files(),
                "1.0": release_files(),
            }
        }
        with patch(
            "infrastructure.adapters.pypi_package_repository.requests.get",
            return_value=json_response(payload),
        ):
            assert await repository.list_versions("pkg") == ("1.0",)

    @pytest.mark.asyncio
    async def test_connection_error_raises_repository_unavailable(
        self, repository: PyPIPackageRepository
    ) -> None:
        with patch(
            "infrastructure.adapters.pypi_package_repository.requests.get",
            side_effect=requests.ConnectionError("no route"),
        ):
            with pytest.raises(RepositoryUnavailableError, match="no route"):
                await repository.list_versions("pkg")

    @pytest.mark.asyncio
    async def test_not_found_raises_repository_unavailable(
        self, repository: PyPIPackageRepository
    ) -> None:
        with patch(
            "infrastructure.adapters.pypi_package_repository.requests.get",
            return_value=json_response({}, status_code=404),
        ):
            with pytest.raises(RepositoryUnavailableError, match="status 404"):
                await repository.list_versions("ghost")

    @pytest.mark.asyncio
    async def test_malformed_listing_raises(self, repository: PyPIPackageRepository) -> None:
        with patch(
            "infrastructure.adapters.pypi_package_repository.requests.get",
            return_value=json_response({"info": {}}),
        ):
            with pytest.raises(RepositoryUnavailableError, match="Malformed"):
                await repository.list_versions("pkg")

    @pytest.mark.asyncio
    async def test_invalid_json_raises(self, repository: PyPIPackageRepository) -> None:
        response = json_response({})
        response.json.side_effect = ValueError("Expecting value")
        with patch(
            "infrastructure.adapters.pypi_package_repository.requests.get",
            return_value=response,
        ):
            with pytest.raises(RepositoryUnavailableError, match="Invalid JSON"):
                await repository.list_versions("pkg")


class TestGetMetadata:
    """Test compatibility evaluation from version metadata."""

    async def metadata(
        self,
        repository: PyPIPackageRepository,
        requires_dist: list[str] | None,
        requires_python: str | None = None,
    ):
        payload = {
            "info": {
                "name": "imbalanced-learn",
                "version": "0.12.0",
                "requires_dist": requires_dist,
                "requires_python": requires_python,
            }
        }
        with patch(
            "infrastructure.adapters.pypi_package_repository.requests.get",
            return_value=json_response(payload),
        ) as mock_get:
            descriptor = await repository.get_metadata("imbalanced-learn", "0.12.0")
        mock_get.assert_called_once_with(
            "https://pypi.example/pypi/imbalanced-learn/0.12.0/json", timeout=7
        )
        return descriptor

    @pytest.mark.asyncio
    async def test_satisfied_toolkit_constraint_is_compatible(
        self, repository: PyPIPackageRepository
    ) -> None:
        descriptor = await self.metadata(
            repository, ["numpy>=1.17.3", "scikit-learn>=1.0.2"], ">=3.8"
        )

        assert descriptor.compatible is True
        assert descriptor.version == "0.12.0"
        assert descriptor.requires_toolkit == ">=1.0.2"
        assert descriptor.requires_python == ">=3.8"

    @pytest.mark.asyncio
    async def test_unsatisfied_toolkit_constraint_is_incompatible(
        self, repository: PyPIPackageRepository
    ) -> None:
        descriptor = await self.metadata(repository, ["scikit-learn<1.3,>=1.1"])

        assert descriptor.compatible is False

    @pytest.mark.asyncio
    async def test_name_normalization(self, repository: PyPIPackageRepository) -> None:
        """Test that requirement names match the toolkit after normalization."""
        descriptor = await self.metadata(repository, ["Scikit_Learn>=2.0"])

        assert descriptor.requires_toolkit == ">=2.0"
        assert descriptor.compatible is False

    @pytest.mark.asyncio
    async def test_extra_only_constraint_is_ignored(
        self, repository: PyPIPackageRepository
    ) -> None:
        descriptor = await self.metadata(
            repository, ['scikit-learn>=9.0; extra == "sklearn"']
        )

        assert descriptor.requires_toolkit is None
        assert descriptor.compatible is True

    @pytest.mark.asyncio
    async def test_unsupported_python_is_incompatible(
        self, repository: PyPIPackageRepository
    ) -> None:
        descriptor = await self.metadata(repository, None, ">=3.12")

        assert descriptor.compatible is False

    @pytest.mark.asyncio
    async def test_no_constraints_is_compatible(
        self, repository: PyPIPackageRepository
    ) -> None:
        descriptor = await self.metadata(repository, None)

        assert descriptor.compatible is True


class TestInstall:
    """Test installation through pip."""

    def popen(self, lines: list[str], return_code: int) -> MagicMock:
        process = MagicMock()
        process.stdout = iter(lines)
        process.wait.return_value = return_code
        process.__enter__.return_value = process
        return process

    @pytest.mark.asyncio
    async def test_install_streams_output(self, repository: PyPIPackageRepository) -> None:
        sink = Mock()
        process = self.popen(["Collecting lightgbm\n", "Successfully installed\n"], 0)

        with patch(
            "infrastructure.adapters.pypi_package_repository.subprocess.Popen",
            return_value=process,
        ) as mock_popen:
            await repository.install("lightgbm", "4.5.0", sink)

        command = mock_popen.call_args[0][0]
        assert command[1:4] == ["-m", "pip", "install"]
        assert "https://pypi.example/simple" in command
        assert command[-1] == "lightgbm==4.5.0"
        assert [c.args[0] for c in sink.call_args_list] == [
            "Collecting lightgbm",
            "Successfully installed",
        ]

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self, repository: PyPIPackageRepository) -> None:
        with patch(
            "infrastructure.adapters.pypi_package_repository.subprocess.Popen",
            return_value=self.popen(["ERROR: No matching distribution\n"], 1),
        ):
            with pytest.raises(PackageInstallError, match="exited with code 1"):
                await repository.install("lightgbm", "4.5.0", Mock())

    @pytest.mark.asyncio
    async def test_missing_pip_raises(self, repository: PyPIPackageRepository) -> None:
        with patch(
            "infrastructure.adapters.pypi_package_repository.subprocess.Popen",
            side_effect=FileNotFoundError("python"),
        ):
            with pytest.raises(PackageInstallError, match="Failed to run pip"):
                await repository.install("lightgbm", "4.5.0", Mock())
