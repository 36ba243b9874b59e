"""
Serialization of analysis results.

Results can be written as plain JSON (one entry per lock file) or as a
CycloneDX BOM carrying every package as a library component together with
the dependency edges between them.
"""

import json
from typing import Any, Dict, Optional, Type

from cyclonedx.model.bom import Bom
from cyclonedx.model.component import Component, ComponentType
from packageurl import PackageURL

from ._analysis.models import AnalysisResult
from .logging_config import logger

# ============================================================================
# JSON
# ============================================================================


def result_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    """Convert an analysis result to a JSON-friendly dictionary."""
    return result.to_dict()


def serialize_json(result: AnalysisResult, indent: Optional[int] = 2) -> str:
    """Serialize an analysis result as JSON with stable key order."""
    return json.dumps(result_to_dict(result), indent=indent)


# ============================================================================
# CycloneDX Version Management
# ============================================================================

# Lazy imports to avoid loading all versions upfront
_CYCLONEDX_OUTPUTTERS: Dict[str, Optional[Type]] = {
    "1.4": None,  # JsonV1Dot4
    "1.5": None,  # JsonV1Dot5
    "1.6": None,  # JsonV1Dot6
}

DEFAULT_CYCLONEDX_VERSION = "1.6"


def _get_cyclonedx_outputter(spec_version: str) -> Type:
    """
    Get the CycloneDX JSON outputter class for a spec version.

    Args:
        spec_version: CycloneDX spec version (e.g., "1.5", "1.6")

    Returns:
        Outputter class for the specified version

    Raises:
        ValueError: If version is not supported
    """
    major_minor = ".".join(spec_version.split(".")[:2]) if spec_version else DEFAULT_CYCLONEDX_VERSION

    if major_minor not in _CYCLONEDX_OUTPUTTERS:
        raise ValueError(
            f"Unsupported CycloneDX version: {spec_version}. "
            f"Supported versions: {', '.join(get_supported_cyclonedx_versions())}"
        )

    if _CYCLONEDX_OUTPUTTERS[major_minor] is None:
        if major_minor == "1.4":
            from cyclonedx.output.json import JsonV1Dot4

            _CYCLONEDX_OUTPUTTERS["1.4"] = JsonV1Dot4
        elif major_minor == "1.5":
            from cyclonedx.output.json import JsonV1Dot5

            _CYCLONEDX_OUTPUTTERS["1.5"] = JsonV1Dot5
        elif major_minor == "1.6":
            from cyclonedx.output.json import JsonV1Dot6

            _CYCLONEDX_OUTPUTTERS["1.6"] = JsonV1Dot6

    return _CYCLONEDX_OUTPUTTERS[major_minor]  # type: ignore[return-value]


def result_to_cyclonedx_bom(result: AnalysisResult) -> Bom:
    """
    Build a CycloneDX BOM from an analysis result.

    Each package becomes a library component whose bom-ref is the package
    id (name@version). A package locked by several lock files is emitted
    once, with the union of its dependency edges.

    Args:
        result: Analysis result to convert

    Returns:
        Bom with components and registered dependencies
    """
    bom = Bom()
    components: Dict[str, Component] = {}
    edges: Dict[str, set[str]] = {}

    for app in result.applications:
        for package in app.packages:
            if package.id not in components:
                components[package.id] = Component(
                    type=ComponentType.LIBRARY,
                    name=package.name,
                    version=package.version,
                    purl=PackageURL.from_string(package.purl),
                    bom_ref=package.id,
                )
                edges[package.id] = set()
            edges[package.id].update(package.depends_on)

    for component in components.values():
        bom.components.add(component)

    for package_id in sorted(components):
        depends_on = [components[dep_id] for dep_id in sorted(edges[package_id]) if dep_id in components]
        bom.register_dependency(components[package_id], depends_on)

    return bom


def serialize_cyclonedx(result: AnalysisResult, spec_version: str = DEFAULT_CYCLONEDX_VERSION) -> str:
    """
    Serialize an analysis result as a CycloneDX JSON document.

    Args:
        result: Analysis result to convert
        spec_version: CycloneDX spec version ("1.4", "1.5" or "1.6")

    Returns:
        JSON string representation of the BOM

    Raises:
        ValueError: If spec_version is unsupported
    """
    outputter_class = _get_cyclonedx_outputter(spec_version)
    bom = result_to_cyclonedx_bom(result)

    logger.debug(f"Serializing CycloneDX BOM using version {spec_version}")
    outputter = outputter_class(bom)
    return outputter.output_as_string(indent=2)


def get_supported_cyclonedx_versions() -> list[str]:
    """
    Get list of supported CycloneDX versions.

    Returns:
        List of version strings (e.g., ["1.4", "1.5", "1.6"])
    """
    return sorted(_CYCLONEDX_OUTPUTTERS.keys())
