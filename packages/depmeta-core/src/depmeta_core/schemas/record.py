"""Metadata record model and wire format.

A record is the deprecation/advisory payload published next to a library
version as ``<name>-<version>-metadata.json``:

    {
      "formatVersion": 2,
      "message": "Artifact has been deprecated! Please consider updating the version!",
      "fail": false,
      "appliesToPreviousVersions": false
    }

Unknown fields are ignored on read. ``appliesToPreviousVersions`` defaults to
false for records written by older producers. Serialization is deterministic,
so generating the same record twice yields identical bytes.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from depmeta_core.errors import MalformedRecordError

DEFAULT_FORMAT_VERSION = 2
"""Format version written and expected when nothing else is configured."""

DEFAULT_MESSAGE = "Artifact has been deprecated! Please consider updating the version!"
"""Advisory text used when the producer does not supply one."""


class Record(BaseModel):
    """Deprecation/advisory record for one published version.

    Attributes:
        format_version: Schema version the producer used (``formatVersion``).
        message: Advisory text shown to the build operator.
        fail: True for a hard failure, False for a warning only.
        applies_to_previous_versions: Whether the record also covers lower
            versions of the same artifact (``appliesToPreviousVersions``).

    Example:
        >>> record = Record(format_version=2, message="Use 2.x", fail=True)
        >>> Record.from_json(record.to_json()) == record
        True
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        strict=True,
        populate_by_name=True,
    )

    format_version: int = Field(
        ...,
        alias="formatVersion",
        description="Record schema version",
    )
    message: str = Field(..., description="Advisory message")
    fail: bool = Field(..., description="Hard failure (true) or warning (false)")
    applies_to_previous_versions: bool = Field(
        default=False,
        alias="appliesToPreviousVersions",
        description="Record also applies to lower versions without their own record",
    )

    @classmethod
    def from_json(cls, content: bytes | str, *, source: str = "<memory>") -> Record:
        """Parse a record from its JSON payload.

        Args:
            content: Raw JSON payload.
            source: Coordinate or path used in error messages.

        Returns:
            Validated Record.

        Raises:
            MalformedRecordError: If the payload is not valid JSON or does not
                match the record format.
        """
        try:
            return cls.model_validate_json(content)
        except ValidationError as e:
            causes = "; ".join(
                f"{'.'.join(str(x) for x in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
            raise MalformedRecordError(source, cause=causes) from e

    def to_json(self) -> bytes:
        """Serialize the record to its wire format.

        Returns:
            UTF-8 JSON bytes with camelCase keys, two-space indent and a
            trailing newline.
        """
        return (self.model_dump_json(by_alias=True, indent=2) + "\n").encode("utf-8")


def parse_record(content: bytes | str, *, source: str = "<memory>") -> Record:
    """Parse a metadata record payload.

    Convenience wrapper around Record.from_json().

    Raises:
        MalformedRecordError: If the payload is malformed.
    """
    return Record.from_json(content, source=source)
