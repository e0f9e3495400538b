"""Unit tests for binary_info parsing."""

import pytest

from bxgraph.components.importing.binary_info_comp import parse_binary_info
from bxgraph.helpers.dto.graph_dto import BinaryFormat
from bxgraph.helpers.exceptions import BinaryInfoError


def _info(**overrides):
    info = {
        "name": "libfoo.so",
        "file_path": "/usr/lib/libfoo.so",
        "file_size": 1024,
        "file_type": {"type": "ELF 64-bit", "architecture": "aarch64"},
        "hashes": {"sha256": "f" * 64},
    }
    info.update(overrides)
    return info


@pytest.mark.unit
def test_full_binary_info() -> None:
    binary = parse_binary_info(_info())

    assert binary.hash == "f" * 64
    assert binary.filename == "libfoo.so"
    assert binary.format is BinaryFormat.ELF
    assert binary.arch == "aarch64"
    assert binary.file_size == 1024


@pytest.mark.unit
def test_uppercase_hash_key_and_filename_alias() -> None:
    info = _info(hashes={"SHA256": "abc"})
    del info["name"]
    info["filename"] = "alias.bin"

    binary = parse_binary_info(info)

    assert binary.hash == "abc"
    assert binary.filename == "alias.bin"


@pytest.mark.unit
def test_lenient_defaults() -> None:
    info = _info(file_size="big", file_type={"type": "Mach-O"})
    del info["file_path"]

    binary = parse_binary_info(info)

    assert binary.file_path == ""
    assert binary.file_size == 0
    assert binary.arch == "unknown"
    assert binary.format is BinaryFormat.MACHO


@pytest.mark.unit
@pytest.mark.parametrize(
    ("mutate", "message"),
    [
        (lambda i: i.pop("hashes"), "Missing hashes"),
        (lambda i: i.update(hashes={"md5": "x"}), "Missing sha256 hash"),
        (lambda i: i.pop("name"), "Missing filename"),
        (lambda i: i.pop("file_type"), "Missing file_type"),
        (lambda i: i.update(file_type={"architecture": "x86"}), "Missing file type"),
    ],
)
def test_required_fields(mutate, message) -> None:
    info = _info()
    mutate(info)

    with pytest.raises(BinaryInfoError, match=message):
        parse_binary_info(info)
