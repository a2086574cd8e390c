"""Export functions for generated data.

This module provides pure projections of generated entities:
- to_json / from_json: Lossless JSON round-trip of a Dataset
- to_records: Flat dict records (nested values JSON-encoded)
- to_arrow_table: PyArrow Table built from the flat records
- to_csv: CSV text rendered by the PyArrow CSV writer
"""

from __future__ import annotations

import io
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pyarrow as pa
from pyarrow import csv as pa_csv
from pydantic import BaseModel

from photondrift_synthetic.schemas.dataset import Dataset


def to_json(
    data: BaseModel | Sequence[BaseModel],
    *,
    indent: int = 2,
    output_path: Path | str | None = None,
) -> str:
    """Serialize a model or a list of models to JSON.

    Args:
        data: Dataset, single entity, or list of entities
        indent: Indentation width
        output_path: Optional path to also write the JSON to. If provided,
            creates parent directories as needed.

    Returns:
        JSON text with datetimes in ISO 8601.

    Example:
        >>> text = to_json(dataset)
        >>> from_json(text) == dataset
        True
    """
    if isinstance(data, BaseModel):
        text = data.model_dump_json(indent=indent)
    else:
        text = json.dumps([model.model_dump(mode="json") for model in data], indent=indent)

    if output_path is not None:
        _write_text_file(text, output_path)

    return text


def from_json(text: str | bytes) -> Dataset:
    """Validate JSON produced by to_json(dataset) back into a Dataset.

    Raises:
        pydantic.ValidationError: If the document is not a valid dataset.
    """
    return Dataset.model_validate_json(text)


def to_records(models: Sequence[BaseModel]) -> list[dict[str, Any]]:
    """Flatten models into one dict per model.

    Top-level scalar fields keep their JSON value; nested objects and lists
    are JSON-encoded strings. Datetimes become ISO 8601 strings.
    """
    records: list[dict[str, Any]] = []
    for model in models:
        dumped = model.model_dump(mode="json")
        records.append(
            {
                key: json.dumps(value) if isinstance(value, (dict, list)) else value
                for key, value in dumped.items()
            }
        )
    return records


def to_arrow_table(models: Sequence[BaseModel]) -> pa.Table:
    """Build a PyArrow Table from the flat records of models.

    Example:
        >>> table = to_arrow_table(dataset.drift_events)
        >>> table.num_rows == len(dataset.drift_events)
        True
    """
    return pa.Table.from_pylist(to_records(models))


def to_csv(models: Sequence[BaseModel]) -> str:
    """Render models as CSV.

    The header comes from the first record's keys; string values are quoted.

    Returns:
        CSV text, or "" for an empty input.
    """
    if not models:
        return ""

    buffer = io.BytesIO()
    pa_csv.write_csv(
        to_arrow_table(models),
        buffer,
        write_options=pa_csv.WriteOptions(include_header=True, quoting_style="needed"),
    )
    return buffer.getvalue().decode("utf-8")


def _write_text_file(text: str, path: Path | str) -> None:
    """Write text to a file.

    Args:
        text: Content to write.
        path: Output file path.
    """
    output_path = Path(path)

    # Create parent directories if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(text)
