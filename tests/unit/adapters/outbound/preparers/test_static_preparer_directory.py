"""Unit tests for the static preparer directory."""

import json

import pytest

from app.adapters.outbound.preparers.static_preparer_directory import (
    DEFAULT_PREPARERS_PATH,
    StaticPreparerDirectory,
    load_preparer_directory,
)
from app.application.dtos.preparer import LAST_RESORT_PREPARER, Preparer

OW = Preparer(code="ow", first_name="Owliver", last_name="Owl", email="ow@example.com")
RAY = Preparer(code="Ray", first_name="Ray", last_name="Hamilton", email="ray@example.com")
LH = Preparer(code="lh", first_name="Lisa", last_name="Hernandez", email="lisa@example.com")


@pytest.fixture
def directory() -> StaticPreparerDirectory:
    return StaticPreparerDirectory([RAY, OW, LH], default_code="ow")


def test_resolve_is_case_insensitive(directory):
    """Test codes match regardless of case and surrounding spaces."""
    assert directory.resolve("ray") == RAY
    assert directory.resolve("RAY") == RAY
    assert directory.resolve(" LH ") == LH


@pytest.mark.parametrize("code", [None, "", "   ", "unknown"])
def test_missing_or_unknown_code_uses_default(directory, code):
    """Test fallback to the configured default preparer."""
    assert directory.resolve(code) == OW


def test_missing_default_uses_first_entry():
    """Test fallback to the first entry when the default code is not listed."""
    directory = StaticPreparerDirectory([RAY, LH], default_code="ow")
    assert directory.resolve("nope") == RAY


def test_empty_directory_uses_last_resort():
    """Test the hardcoded preparer is returned for an empty directory."""
    directory = StaticPreparerDirectory([], default_code="ow")
    preparer = directory.resolve("ray")
    assert preparer == LAST_RESORT_PREPARER
    assert preparer.code


@pytest.mark.parametrize("code", [None, "", "ow", "x" * 100, "ÖW", "../etc"])
def test_resolve_is_total(directory, code):
    """Test resolution never fails and always yields a code."""
    assert directory.resolve(code).code
    assert StaticPreparerDirectory([]).resolve(code).code


def test_list_keeps_directory_order(directory):
    """Test listing preserves the file order."""
    assert [p.code for p in directory.list()] == ["Ray", "ow", "lh"]
    assert directory.default_code == "ow"


def test_load_from_file(tmp_path):
    """Test loading the JSON directory."""
    path = tmp_path / "preparers.json"
    path.write_text(
        json.dumps(
            {
                "defaultCode": "lh",
                "preparers": [
                    {"code": "ow", "firstName": "Owliver", "lastName": "Owl", "email": "o@x.com"},
                    {"code": "lh", "firstName": "Lisa", "lastName": "H", "avatarUrl": "/a.png"},
                    {"firstName": "No", "lastName": "Code"},
                ],
            }
        )
    )

    directory = load_preparer_directory(str(path))

    assert [p.code for p in directory.list()] == ["ow", "lh"]
    assert directory.default_code == "lh"
    assert directory.resolve(None).first_name == "Lisa"
    assert directory.resolve("lh").avatar_url == "/a.png"


def test_default_code_override(tmp_path):
    """Test an explicit default code overrides the file's."""
    path = tmp_path / "preparers.json"
    path.write_text(json.dumps({"defaultCode": "lh", "preparers": [{"code": "ow"}, {"code": "lh"}]}))

    directory = load_preparer_directory(str(path), default_code="ow")

    assert directory.resolve("missing").code == "ow"


@pytest.mark.parametrize("content", [None, "{not json", "[]"])
def test_unreadable_file_yields_empty_directory(tmp_path, content):
    """Test a missing or malformed file falls back to the last-resort preparer."""
    path = tmp_path / "preparers.json"
    if content is not None:
        path.write_text(content)

    directory = load_preparer_directory(str(path))

    assert directory.list() == []
    assert directory.resolve("ow") == LAST_RESORT_PREPARER


def test_bundled_directory_loads():
    """Test the bundled data file has a resolvable default preparer."""
    directory = load_preparer_directory(str(DEFAULT_PREPARERS_PATH))
    assert directory.list()
    assert directory.resolve(None).code.lower() == directory.default_code.lower()
