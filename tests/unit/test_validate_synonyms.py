"""Unit tests for tools.validate_synonyms."""

from pathlib import Path

import pytest

from tools.validate_synonyms import generate_schema, validate_file

pytestmark = pytest.mark.unit

SYNONYMS_FILE = Path(__file__).resolve().parents[2] / "config" / "breed_synonyms.yaml"


class TestValidateFile:
    def test_valid_file(self, tmp_path):
        content = """\
canonical:
  Rottweilers:
    - Rottweiler
  Pit Bull-Type Dogs:
    - Pit Bull
    - Pit Bulls
"""
        f = tmp_path / "breed_synonyms.yaml"
        f.write_text(content)
        ok, msgs = validate_file(f)
        assert ok, msgs
        assert "2 canonical breed(s)" in msgs[0]
        assert "5 name(s) mapped" in msgs[0]

    def test_shipped_file(self):
        ok, msgs = validate_file(SYNONYMS_FILE)
        assert ok, msgs
        assert not any(m.startswith("[WARN]") for m in msgs)

    def test_missing_file(self, tmp_path):
        ok, msgs = validate_file(tmp_path / "nonexistent.yaml")
        assert not ok
        assert "not found" in msgs[0].lower()

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("canonical: [unclosed\n")
        ok, msgs = validate_file(f)
        assert not ok
        assert "YAML parse error" in msgs[0]

    def test_top_level_list(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- Rottweiler\n")
        ok, msgs = validate_file(f)
        assert not ok
        assert "mapping" in msgs[0]

    def test_variant_with_two_labels(self, tmp_path):
        content = """\
canonical:
  Mastiffs: [Mastiff]
  Bullmastiffs: [Mastiff]
"""
        f = tmp_path / "conflict.yaml"
        f.write_text(content)
        ok, msgs = validate_file(f)
        assert not ok
        assert "maps to both" in msgs[0]

    def test_blank_variant(self, tmp_path):
        f = tmp_path / "blank.yaml"
        f.write_text('canonical:\n  Akitas: ["  "]\n')
        ok, msgs = validate_file(f)
        assert not ok
        assert "Schema validation failed" in msgs[0]

    def test_repeated_variant_warns(self, tmp_path):
        f = tmp_path / "dupe.yaml"
        f.write_text("canonical:\n  Akitas: [Akita, akita]\n")
        ok, msgs = validate_file(f)
        assert ok
        assert any("[WARN]" in m and "Akita" in m for m in msgs)

    def test_empty_file_is_valid(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        ok, msgs = validate_file(f)
        assert ok
        assert "0 canonical breed(s)" in msgs[0]


class TestGenerateSchema:
    def test_schema_has_canonical(self):
        schema = generate_schema()
        assert schema["title"] == "BreedSynonymTable"
        assert "canonical" in schema["properties"]
