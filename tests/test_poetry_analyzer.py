"""Tests for PoetryAnalyzer against the fixture projects."""

import pytest

from lockgraph._analysis import DirectoryTree, Package, Relationship
from lockgraph._poetry import PoetryAnalyzer

DIRECT = Relationship.DIRECT
INDIRECT = Relationship.INDIRECT
UNKNOWN = Relationship.UNKNOWN


def _pkg(name, version, relationship, depends_on=()):
    return Package(
        id=f"{name}@{version}",
        name=name,
        version=version,
        relationship=relationship,
        indirect=relationship is INDIRECT,
        depends_on=list(depends_on),
    )


def _analyze(directory, lock_path="poetry.lock"):
    return PoetryAnalyzer().analyze(DirectoryTree(directory), lock_path)


class TestPoetryAnalyzerFixtures:
    """End-to-end analysis of the fixture projects."""

    def test_happy(self, poetry_data):
        """Test a lock file with a matching pyproject.toml."""
        app = _analyze(poetry_data / "happy")

        assert app is not None
        assert app.type == "poetry"
        assert app.file_path == "poetry.lock"
        assert app.packages == [
            _pkg("certifi", "2022.12.7", INDIRECT),
            _pkg("charset-normalizer", "2.1.1", INDIRECT),
            _pkg("click", "7.1.2", INDIRECT),
            _pkg(
                "flask",
                "1.1.4",
                DIRECT,
                ["click@7.1.2", "itsdangerous@1.1.0", "jinja2@2.11.3", "werkzeug@1.0.1"],
            ),
            _pkg("idna", "3.4", INDIRECT),
            _pkg("itsdangerous", "1.1.0", INDIRECT),
            _pkg("jinja2", "2.11.3", INDIRECT, ["markupsafe@2.1.2"]),
            _pkg("markupsafe", "2.1.2", INDIRECT),
            _pkg(
                "requests",
                "2.28.1",
                DIRECT,
                ["certifi@2022.12.7", "charset-normalizer@2.1.1", "idna@3.4", "urllib3@1.26.14"],
            ),
            _pkg("urllib3", "1.26.14", INDIRECT),
            _pkg("werkzeug", "1.0.1", INDIRECT),
        ]

    def test_no_pyproject(self, poetry_data):
        """Test a lock file without pyproject.toml leaves relationships unknown."""
        app = _analyze(poetry_data / "no-pyproject")

        assert app is not None
        assert app.packages == [
            _pkg("click", "8.1.3", UNKNOWN, ["colorama@0.4.6"]),
            _pkg("colorama", "0.4.6", UNKNOWN),
        ]

    def test_wrong_pyproject(self, poetry_data):
        """Test a pyproject.toml without Poetry data behaves like a missing one."""
        app = _analyze(poetry_data / "wrong-pyproject")

        assert app is not None
        assert app.packages == [
            _pkg("click", "8.1.3", UNKNOWN, ["colorama@0.4.6"]),
            _pkg("colorama", "0.4.6", UNKNOWN),
        ]

    def test_broken_lock_file(self, poetry_data):
        """Test a lock file that fails to parse yields no application."""
        assert _analyze(poetry_data / "sad") is None

    def test_with_groups(self, poetry_data):
        """Test the dev group and what only it needs are removed; other groups stay."""
        app = _analyze(poetry_data / "with-groups")

        assert app is not None
        assert app.packages == [
            _pkg("certifi", "2024.12.14", INDIRECT),
            _pkg("charset-normalizer", "3.4.0", INDIRECT),
            _pkg("idna", "3.10", INDIRECT),
            _pkg("mypy-extensions", "1.0.0", INDIRECT),
            _pkg(
                "requests",
                "2.32.3",
                DIRECT,
                ["certifi@2024.12.14", "charset-normalizer@3.4.0", "idna@3.10", "urllib3@2.2.3"],
            ),
            _pkg("ruff", "0.8.3", INDIRECT),
            _pkg("typing-extensions", "4.12.2", INDIRECT),
            _pkg("typing-inspect", "0.9.0", DIRECT, ["mypy-extensions@1.0.0", "typing-extensions@4.12.2"]),
            _pkg("urllib3", "2.2.3", INDIRECT),
        ]

    @pytest.mark.parametrize("project", ["happy", "no-pyproject", "wrong-pyproject", "with-groups"])
    def test_repeatable(self, poetry_data, project):
        """Test analyzing the same input twice gives equal results."""
        assert _analyze(poetry_data / project) == _analyze(poetry_data / project)

    @pytest.mark.parametrize("project", ["happy", "with-groups"])
    def test_edges_point_at_listed_packages(self, poetry_data, project):
        """Test every edge targets a package of the same application."""
        app = _analyze(poetry_data / project)
        ids = {p.id for p in app.packages}
        for package in app.packages:
            assert set(package.depends_on) <= ids
            assert package.depends_on == sorted(package.depends_on)
            assert package.indirect == (package.relationship is INDIRECT)


class TestPoetryAnalyzerInputs:
    """Tests for analyzer behavior on generated inputs."""

    LOCK = """
[[package]]
name = "b-pkg"
version = "2.0"

[package.dependencies]
A_Pkg = "*"

[[package]]
name = "a-pkg"
version = "1.0"
"""

    def test_input_order_does_not_matter(self, write_project, tmp_path):
        """Test reordering lock stanzas does not change the output."""
        reordered = """
[[package]]
name = "a-pkg"
version = "1.0"

[[package]]
name = "b-pkg"
version = "2.0"

[package.dependencies]
A_Pkg = "*"
"""
        first = _analyze(write_project(self.LOCK, subdir="one"))
        second = _analyze(write_project(reordered, subdir="two"))
        assert first.packages == second.packages
        assert [p.id for p in first.packages] == ["a-pkg@1.0", "b-pkg@2.0"]
        assert first.packages[1].depends_on == ["a-pkg@1.0"]

    def test_sibling_manifest_in_subdirectory(self, write_project):
        """Test the pyproject.toml next to a nested lock file is used."""
        root = write_project(self.LOCK, '[tool.poetry.dependencies]\nb-pkg = "*"\n', subdir="service")
        app = PoetryAnalyzer().analyze(DirectoryTree(root.parent), "service/poetry.lock")

        assert app.file_path == "service/poetry.lock"
        relationships = {p.name: p.relationship for p in app.packages}
        assert relationships == {"a-pkg": INDIRECT, "b-pkg": DIRECT}

    def test_empty_lock_file(self, write_project):
        """Test a lock file without packages gives an empty application."""
        app = _analyze(write_project('[metadata]\nlock-version = "2.1"\n'))
        assert app is not None
        assert app.packages == []

    def test_missing_lock_file(self, tmp_path):
        """Test a lock path that cannot be read yields no application."""
        assert _analyze(tmp_path) is None

    def test_lock_level_dev_without_manifest(self, write_project):
        """Test entries marked dev-only in an old lock file are removed."""
        lock = """
[[package]]
name = "click"
version = "8.1.3"
category = "main"

[[package]]
name = "pytest"
version = "7.0.0"
category = "dev"
"""
        app = _analyze(write_project(lock))
        assert [p.id for p in app.packages] == ["click@8.1.3"]
        assert app.packages[0].relationship is UNKNOWN

    def test_lock_level_dev_dependency_of_main_package(self, write_project):
        """Test a package marked dev in the lock file is kept when a main package needs it."""
        lock = """
[[package]]
name = "app-lib"
version = "1.0"
groups = ["main"]

[package.dependencies]
colorama = "*"

[[package]]
name = "colorama"
version = "0.4.6"
groups = ["dev"]
"""
        app = _analyze(write_project(lock, '[tool.poetry.dependencies]\napp-lib = "*"\n'))
        assert [(p.id, p.depends_on) for p in app.packages] == [
            ("app-lib@1.0", ["colorama@0.4.6"]),
            ("colorama@0.4.6", []),
        ]
        assert app.packages[1].relationship is INDIRECT

    def test_pep621_manifest(self, write_project):
        """Test a Poetry 2 project descriptor drives classification."""
        pyproject = """
[project]
name = "app"
dependencies = ["B.Pkg>=2"]
"""
        app = _analyze(write_project(self.LOCK, pyproject))
        relationships = {p.name: p.relationship for p in app.packages}
        assert relationships == {"a-pkg": INDIRECT, "b-pkg": DIRECT}

    def test_supports(self):
        """Test lock file name matching."""
        analyzer = PoetryAnalyzer()
        assert analyzer.supports("poetry.lock")
        assert not analyzer.supports("Pipfile.lock")
        assert not analyzer.supports("pyproject.toml")
