"""
Pytest fixtures shared by the whole suite.

Unit tests never talk to a real ArangoDB: operation classes are tested
against a MagicMock database, and workflows/services against the in-memory
FakeGraphDatabase from tests/fakes.py.
"""

import sys
from pathlib import Path

import pytest

# Add project root to path so tests can import bxgraph without installation
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from bxgraph.helpers.logging_helper import clear_log_context  # noqa: E402
from tests.fakes import SAMPLE_HASH, FakeGraphDatabase  # noqa: E402


@pytest.fixture
def fake_db() -> FakeGraphDatabase:
    """Empty in-memory graph store."""
    return FakeGraphDatabase()


@pytest.fixture(autouse=True)
def _reset_log_context():
    yield
    clear_log_context()


@pytest.fixture
def sample_payload() -> dict:
    """Payload with every section populated and internally consistent."""
    return {
        "binary_info": {
            "name": "sample.exe",
            "file_path": "C:/samples/sample.exe",
            "file_size": 4096,
            "file_type": {"type": "PE32+ executable (console) x86-64", "architecture": "x86_64"},
            "hashes": {"sha256": SAMPLE_HASH},
        },
        "functions": [
            {"name": "main", "address": "0x1000", "size": 64},
            {"name": "helper", "address": "0x1010", "size": 16},
            {"name": "util", "address": "0x1020"},
        ],
        "strings": [
            {"value": "usage\u0000", "address": "0x3000"},
            "hello",
        ],
        "imports": [
            {"name": "CreateFileW", "library": "KERNEL32.dll", "address": "0x2000"},
        ],
        "exports": [
            {"name": "Exported", "address": "0x1030"},
        ],
        "calls": [
            {"from_address": "0x1000", "to_address": "0x1010", "offset": "0x1004", "type": "direct"},
            {"from_address": "0x1010", "to_address": "0x1020", "offset": "0x1014"},
            {"from_address": "0x1000", "to_address": "0x2000", "offset": "0x1008", "type": "indirect"},
        ],
    }
