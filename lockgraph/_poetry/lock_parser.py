"""Parser for poetry.lock files (Python Poetry)."""

from typing import Any

import tomllib

from .._analysis.models import normalize_package_name
from ..exceptions import ParseError
from ..logging_config import logger
from .models import LockedEntry


class PoetryLockParser:
    """Parser for poetry.lock files.

    poetry.lock is a TOML file with [[package]] sections:
    [[package]]
    name = "flask"
    version = "1.1.4"
    category = "main"            # lock format < 2.1
    groups = ["main"]            # lock format >= 2.1

    [package.dependencies]
    click = ">=5.1,<8.0"
    Jinja2 = {version = ">=2.10.1,<3.0", optional = true}
    numpy = [
        {version = "<1.25", markers = "python_version < \"3.9\""},
        {version = ">=1.25", markers = "python_version >= \"3.9\""},
    ]

    Only dependency names are kept; constraints, markers and extras are
    ignored since the lock file already pins every version.
    """

    def parse(self, content: str) -> list[LockedEntry]:
        """Parse poetry.lock content into locked entries.

        Args:
            content: Whole lock file as text

        Returns:
            LockedEntry objects in lock file order.

        Raises:
            ParseError: If the content is not valid TOML or has no usable
                package list.
        """
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            raise ParseError(f"Failed to decode poetry.lock: {e}") from e

        packages = data.get("package", [])
        if not isinstance(packages, list):
            raise ParseError("Invalid poetry.lock: 'package' must be an array of tables")

        entries: list[LockedEntry] = []
        for pkg in packages:
            if not isinstance(pkg, dict):
                logger.debug(f"Skipping non-table package entry in poetry.lock: {pkg!r}")
                continue

            name = pkg.get("name")
            version = pkg.get("version")
            if not isinstance(name, str) or not isinstance(version, str) or not name or not version:
                logger.debug(f"Skipping poetry.lock entry without name or version: {pkg.get('name')!r}")
                continue

            entries.append(
                LockedEntry(
                    name=name,
                    version=version,
                    dependency_names=self._dependency_names(name, pkg.get("dependencies", {})),
                    groups=self._groups(pkg),
                )
            )

        return entries

    @staticmethod
    def _dependency_names(package_name: str, dependencies: Any) -> tuple[str, ...]:
        """Extract required names from a [package.dependencies] table."""
        if not isinstance(dependencies, dict):
            logger.debug(f"Ignoring malformed dependencies table of {package_name}")
            return ()

        names: list[str] = []
        seen: set[str] = set()
        for dep_name in dependencies:
            normalized = normalize_package_name(dep_name)
            if normalized in seen:
                continue
            seen.add(normalized)
            names.append(dep_name)
        return tuple(names)

    @staticmethod
    def _groups(pkg: dict[str, Any]) -> tuple[str, ...]:
        """Read group membership, preferring ``groups`` over legacy ``category``."""
        groups = pkg.get("groups")
        if isinstance(groups, list):
            return tuple(g for g in groups if isinstance(g, str))

        category = pkg.get("category")
        if isinstance(category, str) and category:
            return (category,)
        return ()
