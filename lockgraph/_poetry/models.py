"""Data models for Poetry lock file analysis."""

from dataclasses import dataclass, field

from .._analysis.models import Relationship, normalize_package_name

DEV_GROUP = "dev"


@dataclass(frozen=True)
class LockedEntry:
    """One [[package]] stanza of poetry.lock.

    Attributes:
        name: Package name as written in the lock file
        version: Exact resolved version
        dependency_names: Names this entry requires, duplicates removed
        groups: Group tags from ``category`` or ``groups``; empty means main
    """

    name: str
    version: str
    dependency_names: tuple[str, ...] = ()
    groups: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return f"{self.name}@{self.version}"

    @property
    def is_dev_only(self) -> bool:
        """True when the lock file itself marks the entry as dev-group only."""
        return self.groups == (DEV_GROUP,)


@dataclass(frozen=True)
class ManifestDependencies:
    """Dependency names declared in pyproject.toml, normalized.

    Both sets are empty when the descriptor is missing or unusable.
    """

    direct: frozenset[str] = frozenset()
    dev: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "direct", frozenset(normalize_package_name(n) for n in self.direct))
        object.__setattr__(self, "dev", frozenset(normalize_package_name(n) for n in self.dev))

    @property
    def is_empty(self) -> bool:
        return not self.direct and not self.dev


@dataclass
class PackageNode:
    """A versioned package in the dependency graph built from one lock file."""

    id: str
    name: str
    version: str
    normalized_name: str
    dev_only: bool = False
    relationship: Relationship = Relationship.UNKNOWN
    indirect: bool = False
    depends_on: list[str] = field(default_factory=list)
