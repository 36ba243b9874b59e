"""Data models for lock file analysis results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from packageurl import PackageURL


class Relationship(Enum):
    """How a package relates to the project that locked it.

    UNKNOWN is used when no project descriptor was available to decide.
    """

    UNKNOWN = "unknown"
    DIRECT = "direct"
    INDIRECT = "indirect"


@dataclass
class Package:
    """A resolved package as exposed to consumers of the analysis.

    Attributes:
        id: Unique key in ``name@version`` form, spelled as in the lock file
        name: Package name as written in the lock file
        version: Exact locked version
        relationship: Direct/indirect classification
        indirect: True iff relationship is INDIRECT
        depends_on: Sorted ids of other packages in the same application
    """

    id: str
    name: str
    version: str
    relationship: Relationship = Relationship.UNKNOWN
    indirect: bool = False
    depends_on: List[str] = field(default_factory=list)

    @property
    def purl(self) -> str:
        """Package URL for this package (pkg:pypi/name@version)."""
        return PackageURL(type="pypi", name=self.name, version=self.version).to_string()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary with stable key order."""
        return {
            "id": self.id,
            "name": self.name,
            "version": self.version,
            "relationship": self.relationship.value,
            "indirect": self.indirect,
            "depends_on": list(self.depends_on),
            "purl": self.purl,
        }


@dataclass
class Application:
    """Packages discovered from one lock file.

    Attributes:
        type: Ecosystem tag of the analyzer that produced it (e.g. "poetry")
        file_path: Lock file path relative to the analyzed tree root
        packages: Packages sorted by name, then version
    """

    type: str
    file_path: str
    packages: List[Package] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "file_path": self.file_path,
            "packages": [p.to_dict() for p in self.packages],
        }


@dataclass
class AnalysisResult:
    """Result of analyzing a file tree. Empty when nothing was found or parsed."""

    applications: List[Application] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.applications

    @property
    def package_count(self) -> int:
        return sum(len(app.packages) for app in self.applications)

    def to_dict(self) -> Dict[str, Any]:
        return {"applications": [app.to_dict() for app in self.applications]}


def normalize_package_name(name: str) -> str:
    """Build the key used to match package names.

    Names are compared case-insensitively with hyphens, underscores and
    dots treated as equivalent (the equivalence PEP 503 defines). The key
    uses "_" as separator and is not itself a PEP 503 normalized name.

    Only used for matching names across the lock file and the project
    descriptor; exposed names keep their original spelling.

    Args:
        name: Package name to normalize

    Returns:
        Lowercase matching key with underscores
    """
    return name.strip().lower().replace("-", "_").replace(".", "_")
