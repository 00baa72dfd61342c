"""Value objects for the scoring plugin domain.

Value objects are immutable data carriers that represent domain concepts.
They have no identity and are compared by their attributes.
"""

from .dataset_header import Attribute, AttributeType, DatasetHeader
from .installer_config import DEFAULT_PACKAGES, InstallerConfig
from .model_capability import ModelCapability
from .package_descriptor import InstallStatus, PackageDescriptor, PackageOutcome
from .scoring_result import ScoringResult

__all__ = [
    "Attribute",
    "AttributeType",
    "DatasetHeader",
    "DEFAULT_PACKAGES",
    "InstallerConfig",
    "InstallStatus",
    "ModelCapability",
    "PackageDescriptor",
    "PackageOutcome",
    "ScoringResult",
]
