"""Unit tests for export functions."""

from __future__ import annotations

import csv
import io
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from photondrift_synthetic.config import GeneratorConfig
from photondrift_synthetic.export import from_json, to_arrow_table, to_csv, to_json, to_records
from photondrift_synthetic.generators.orchestrator import generate_complete_dataset
from photondrift_synthetic.schemas.dataset import Dataset

pytestmark = pytest.mark.unit


@pytest.fixture
def dataset(tiny_config: GeneratorConfig) -> Dataset:
    return generate_complete_dataset(tiny_config)


class TestJson:
    """Tests for to_json and from_json."""

    def test_round_trip(self, dataset: Dataset) -> None:
        """A dataset survives a JSON round trip unchanged."""
        restored = from_json(to_json(dataset))

        assert restored == dataset

    def test_datetimes_are_iso(self, dataset: Dataset) -> None:
        """Timestamps serialize as ISO 8601 strings."""
        document = json.loads(to_json(dataset))

        timestamp = document["drift_events"][0]["timestamp"]
        assert isinstance(timestamp, str)
        assert timestamp.startswith("2024-")

    def test_list_of_entities(self, dataset: Dataset) -> None:
        """Lists serialize as JSON arrays."""
        document = json.loads(to_json(dataset.team_metrics, indent=0))

        assert [item["team"] for item in document] == [t.team for t in dataset.team_metrics]

    def test_output_path_writes_file(self, dataset: Dataset, tmp_path: Path) -> None:
        """output_path writes the same text, creating directories."""
        path = tmp_path / "fixtures" / "nested" / "dataset.json"

        text = to_json(dataset, output_path=path)

        assert path.read_text() == text

    def test_invalid_document(self) -> None:
        """Malformed datasets are rejected."""
        with pytest.raises(ValidationError):
            from_json('{"drift_events": []}')


class TestRecords:
    """Tests for flat records and tables."""

    def test_nested_values_become_json(self, dataset: Dataset) -> None:
        """Nested objects and lists are JSON strings; scalars are kept."""
        records = to_records(dataset.drift_events)
        first = records[0]
        event = dataset.drift_events[0]

        assert first["id"] == event.id
        assert first["confidence"] == event.confidence
        assert json.loads(first["tags"]) == event.tags
        assert json.loads(first["location"])["file"] == event.location.file

    def test_arrow_table(self, dataset: Dataset) -> None:
        """The Arrow table has one row per entity and one column per field."""
        table = to_arrow_table(dataset.architecture_health)

        assert table.num_rows == len(dataset.architecture_health)
        assert "overall_score" in table.column_names
        assert table.column("repository").to_pylist() == [
            s.repository for s in dataset.architecture_health
        ]


class TestCsv:
    """Tests for to_csv."""

    def test_empty_input(self) -> None:
        """No models render as an empty string."""
        assert to_csv([]) == ""

    def test_header_and_rows(self, dataset: Dataset) -> None:
        """CSV has a header plus one row per event."""
        text = to_csv(dataset.drift_events)

        rows = list(csv.DictReader(io.StringIO(text)))
        assert len(rows) == len(dataset.drift_events)
        assert rows[0]["id"] == dataset.drift_events[0].id
        assert json.loads(rows[0]["tags"]) == dataset.drift_events[0].tags
