"""Unit tests for ImportService."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from bxgraph.helpers.exceptions import PayloadError
from bxgraph.services.domain.import_svc import ImportService


class TestImport:
    @pytest.mark.unit
    def test_import_from_file(self, fake_db, sample_payload, tmp_path: Path) -> None:
        path = tmp_path / "sample.json"
        path.write_text(json.dumps(sample_payload), encoding="utf-8")

        result = ImportService(fake_db, batch_size=2).import_from_file(path)

        assert result.success
        assert fake_db.functions.batches == [2, 1]

    @pytest.mark.unit
    def test_import_from_missing_file(self, fake_db, tmp_path: Path) -> None:
        with pytest.raises(PayloadError):
            ImportService(fake_db).import_from_file(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_validate_data(self, fake_db) -> None:
        assert not ImportService(fake_db).validate_data({}).valid


class TestStatistics:
    @pytest.mark.unit
    def test_database_stats(self, fake_db, sample_payload) -> None:
        service = ImportService(fake_db)
        service.import_from_json(sample_payload)

        stats = service.get_database_stats()

        # 3 internal + 1 import + 1 export function
        assert stats.label_counts == {"Binary": 1, "Function": 5, "String": 2, "Library": 1}
        assert stats.node_count == 9
        assert stats.relationship_count == 3 + 1 + 1 + 3

    @pytest.mark.unit
    def test_import_statistics_reflect_store(self, fake_db, sample_payload) -> None:
        service = ImportService(fake_db)
        service.import_from_json(sample_payload)

        stats = service.get_import_statistics()

        assert stats.functions == 5
        assert stats.calls_relationships == 3


class TestExport:
    @pytest.mark.unit
    def test_export_to_json(self, tmp_path: Path) -> None:
        db = MagicMock()
        db.stats.export_rows.return_value = [
            {"node": {"name": "kernel32.dll", "label": "libraries"}, "relationship_type": None, "target": None}
        ]
        out = tmp_path / "nested" / "graph.json"

        written = ImportService(db).export_to_json(out)

        assert written == 1
        assert json.loads(out.read_text(encoding="utf-8"))[0]["node"]["name"] == "kernel32.dll"
