"""Project descriptor (depmeta.yaml) and the dependency source built on it.

The descriptor names the project's own coordinate and its already-resolved
dependency set:

    group: com.acme
    name: checkout-service
    version: 3.1.0
    dependencies:
      - {group: com.acme, name: payments-client, version: 1.0.0}
    transitive_dependencies:
      - {group: com.acme, name: http-core, version: 2.4.1}

``transitive_dependencies`` lists the resolved closure beyond the direct
dependencies. depmeta never resolves versions itself.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml
from pydantic import BaseModel, ConfigDict, Field

from depmeta_core.schemas.coordinate import (
    IDENTIFIER_PATTERN,
    Coordinate,
    Dependency,
    DependencyScope,
)

DEFAULT_PROJECT_FILE = "depmeta.yaml"


class DependencyEntry(BaseModel):
    """One resolved dependency as written in the descriptor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    group: str = Field(..., min_length=1, pattern=IDENTIFIER_PATTERN)
    name: str = Field(..., min_length=1, pattern=IDENTIFIER_PATTERN)
    version: str = Field(..., min_length=1)

    def to_dependency(self, scope: DependencyScope) -> Dependency:
        """Convert to a Dependency with the given scope."""
        return Dependency(group=self.group, name=self.name, version=self.version, scope=scope)


class ProjectSpec(BaseModel):
    """Root model of the depmeta.yaml project descriptor.

    Attributes:
        group: Project group id.
        name: Project artifact name.
        version: Project version.
        dependencies: Direct dependencies, resolved to one version each.
        transitive_dependencies: Resolved transitive closure beyond the direct set.

    Example:
        >>> spec = ProjectSpec.from_yaml("depmeta.yaml")
        >>> spec.coordinate.key
        'com.acme:checkout-service'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    group: str = Field(..., min_length=1, pattern=IDENTIFIER_PATTERN, description="Group id")
    name: str = Field(..., min_length=1, pattern=IDENTIFIER_PATTERN, description="Artifact name")
    version: str = Field(..., min_length=1, description="Project version")
    dependencies: list[DependencyEntry] = Field(
        default_factory=list,
        description="Direct dependencies",
    )
    transitive_dependencies: list[DependencyEntry] = Field(
        default_factory=list,
        description="Resolved transitive dependencies",
    )

    @property
    def coordinate(self) -> Coordinate:
        """Main artifact coordinate of the project."""
        return Coordinate(group=self.group, name=self.name, version=self.version)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ProjectSpec:
        """Load and validate a ProjectSpec from a YAML file.

        Args:
            path: Path to depmeta.yaml.

        Returns:
            Validated ProjectSpec instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            pydantic.ValidationError: If schema validation fails.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        return cls.model_validate(data)


@runtime_checkable
class DependencySource(Protocol):
    """Supplies the resolved dependency set of a project."""

    def direct_dependencies(self, project: Coordinate) -> set[Dependency]:
        """Return the project's direct dependencies."""
        ...

    def transitive_closure(self, project: Coordinate) -> set[Dependency]:
        """Return the project's dependencies including the transitive closure."""
        ...


class ProjectDependencySource:
    """DependencySource backed by a ProjectSpec descriptor."""

    def __init__(self, spec: ProjectSpec) -> None:
        self.spec = spec

    def direct_dependencies(self, project: Coordinate) -> set[Dependency]:
        return {entry.to_dependency(DependencyScope.DIRECT) for entry in self.spec.dependencies}

    def transitive_closure(self, project: Coordinate) -> set[Dependency]:
        direct = self.direct_dependencies(project)
        direct_ids = {dep.identity for dep in direct}
        transitive = {
            entry.to_dependency(DependencyScope.TRANSITIVE)
            for entry in self.spec.transitive_dependencies
            if (entry.group, entry.name, entry.version) not in direct_ids
        }
        return direct | transitive
