"""Pydantic models for depmeta.

This module exports:
- Coordinate, Dependency, DependencyScope: artifact identity models
- Record: the metadata record wire model
- ProjectSpec, DependencySource: project descriptor and dependency supply
"""

from __future__ import annotations

from depmeta_core.schemas.coordinate import (
    METADATA_CLASSIFIER,
    METADATA_TYPE,
    Coordinate,
    Dependency,
    DependencyScope,
)
from depmeta_core.schemas.project import (
    DEFAULT_PROJECT_FILE,
    DependencyEntry,
    DependencySource,
    ProjectDependencySource,
    ProjectSpec,
)
from depmeta_core.schemas.record import (
    DEFAULT_FORMAT_VERSION,
    DEFAULT_MESSAGE,
    Record,
    parse_record,
)

__all__ = [
    # Coordinates
    "METADATA_CLASSIFIER",
    "METADATA_TYPE",
    "Coordinate",
    "Dependency",
    "DependencyScope",
    # Records
    "DEFAULT_FORMAT_VERSION",
    "DEFAULT_MESSAGE",
    "Record",
    "parse_record",
    # Project descriptor
    "DEFAULT_PROJECT_FILE",
    "DependencyEntry",
    "DependencySource",
    "ProjectDependencySource",
    "ProjectSpec",
]
