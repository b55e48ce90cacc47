"""Artifact coordinate and dependency models.

A coordinate identifies one published artifact:
(group, name, version, classifier, type). Metadata records always live at
the fixed ``metadata`` classifier and ``json`` type next to the main artifact.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

METADATA_CLASSIFIER = "metadata"
"""Classifier of every metadata record artifact."""

METADATA_TYPE = "json"
"""Type (extension) of every metadata record artifact."""

# Group/name pattern: dotted identifiers with hyphens/underscores
IDENTIFIER_PATTERN = r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$"


class Coordinate(BaseModel):
    """Coordinate of a published artifact.

    Attributes:
        group: Group identifier (e.g., "com.acme").
        name: Artifact name (e.g., "payments-client").
        version: Artifact version. None for a version-less coordinate.
        classifier: Artifact classifier. Empty for the main artifact.
        type: Artifact type / file extension.

    Example:
        >>> lib = Coordinate(group="com.acme", name="lib", version="1.0.0")
        >>> str(lib.metadata("1.2.0"))
        'com.acme:lib:json:metadata:1.2.0'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    group: str = Field(..., min_length=1, pattern=IDENTIFIER_PATTERN, description="Group id")
    name: str = Field(..., min_length=1, pattern=IDENTIFIER_PATTERN, description="Artifact name")
    version: str | None = Field(default=None, min_length=1, description="Artifact version")
    classifier: str = Field(default="", description="Artifact classifier")
    type: str = Field(default="jar", min_length=1, description="Artifact type")

    @property
    def key(self) -> str:
        """Version-less identity ``group:name``."""
        return f"{self.group}:{self.name}"

    def with_version(self, version: str) -> Coordinate:
        """Return a copy of this coordinate at another version."""
        return self.model_copy(update={"version": version})

    def metadata(self, version: str | None = None) -> Coordinate:
        """Return the metadata record coordinate for a version.

        Args:
            version: Version of the record. Defaults to this coordinate's version.

        Returns:
            Coordinate with the metadata classifier and type.
        """
        return Coordinate(
            group=self.group,
            name=self.name,
            version=version or self.version,
            classifier=METADATA_CLASSIFIER,
            type=METADATA_TYPE,
        )

    @property
    def filename(self) -> str:
        """File name of the artifact in a repository layout."""
        base = f"{self.name}-{self.version}"
        if self.classifier:
            base = f"{base}-{self.classifier}"
        return f"{base}.{self.type}"

    def repository_path(self) -> str:
        """Relative path of the artifact in a Maven-style repository layout.

        Example:
            >>> Coordinate(group="com.acme", name="lib", version="1.0").metadata().repository_path()
            'com/acme/lib/1.0/lib-1.0-metadata.json'
        """
        if self.version is None:
            return self.versions_path()
        return f"{self.versions_path()}/{self.version}/{self.filename}"

    def versions_path(self) -> str:
        """Relative path of the directory holding every version of this artifact."""
        return f"{self.group.replace('.', '/')}/{self.name}"

    def __str__(self) -> str:
        parts = [self.group, self.name]
        if self.classifier or self.type != "jar":
            parts.append(self.type)
        if self.classifier:
            parts.append(self.classifier)
        if self.version:
            parts.append(self.version)
        return ":".join(parts)


class DependencyScope(str, Enum):
    """How a dependency entered the project's dependency set.

    Attributes:
        DIRECT: Declared by the project itself
        TRANSITIVE: Pulled in by another dependency
    """

    DIRECT = "direct"
    TRANSITIVE = "transitive"


class Dependency(BaseModel):
    """A coordinate resolved to exactly one version.

    Attributes:
        group: Group identifier.
        name: Artifact name.
        version: Resolved version.
        scope: Whether the dependency is direct or transitive.

    Example:
        >>> dep = Dependency(group="com.acme", name="lib", version="1.0.0")
        >>> dep.coordinate.key
        'com.acme:lib'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    group: str = Field(..., min_length=1, pattern=IDENTIFIER_PATTERN, description="Group id")
    name: str = Field(..., min_length=1, pattern=IDENTIFIER_PATTERN, description="Artifact name")
    version: str = Field(..., min_length=1, description="Resolved version")
    scope: DependencyScope = Field(default=DependencyScope.DIRECT, description="Dependency scope")

    @property
    def coordinate(self) -> Coordinate:
        """Main artifact coordinate of this dependency."""
        return Coordinate(group=self.group, name=self.name, version=self.version)

    @property
    def identity(self) -> tuple[str, str, str]:
        """Scope-independent identity used for de-duplication and ordering."""
        return (self.group, self.name, self.version)

    def __str__(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"
