"""Unit tests for DatabaseAdminService and CLI bootstrap wiring."""

from unittest.mock import MagicMock, patch

import pytest

from bxgraph.services.infrastructure.cli_bootstrap_svc import get_config_service, get_import_service
from bxgraph.services.infrastructure.database_admin_svc import DatabaseAdminService


@pytest.mark.unit
def test_initialize_checks_connectivity_before_schema() -> None:
    db = MagicMock()
    db.verify_connectivity.return_value = {"version": "3.12", "database": "bxgraph"}

    info = DatabaseAdminService(db).initialize()

    assert info["version"] == "3.12"
    assert [c[0] for c in db.method_calls] == ["verify_connectivity", "ensure_schema"]


@pytest.mark.unit
def test_clear() -> None:
    db = MagicMock()

    DatabaseAdminService(db).clear()

    db.clear_all.assert_called_once_with()


@pytest.mark.unit
def test_import_service_uses_configured_batch_size(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BXGRAPH_BATCH_SIZE", "64")
    config_service = get_config_service()

    with patch("bxgraph.services.infrastructure.cli_bootstrap_svc.Database") as database_cls:
        service = get_import_service(config_service)

    database_cls.connect.assert_called_once_with(
        hosts="http://localhost:8529", username="root", password="", db_name="bxgraph"
    )
    assert service.batch_size == 64
