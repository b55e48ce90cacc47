"""JSON Schema export for the metadata record format.

Exports a JSON Schema Draft 2020-12 document generated from the Record
model so producers in other ecosystems can validate their payloads.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from depmeta_core.schemas.record import Record

RECORD_SCHEMA_ID = "https://depmeta.dev/schemas/metadata-record.schema.json"


def export_record_schema(
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export the metadata record JSON Schema.

    Args:
        output_path: Optional path to write schema file. If provided,
            creates parent directories as needed.

    Returns:
        Dictionary containing the JSON Schema.

    Example:
        >>> schema = export_record_schema()
        >>> sorted(schema["properties"])
        ['appliesToPreviousVersions', 'fail', 'formatVersion', 'message']
    """
    # Wire names, not Python attribute names
    schema = Record.model_json_schema(by_alias=True)

    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["$id"] = RECORD_SCHEMA_ID

    if output_path is not None:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(schema, indent=2) + "\n")

    return schema
