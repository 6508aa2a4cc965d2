"""Unit tests for the LabelsYAMLProcessor class."""

from pathlib import Path

import pytest
from _pytest.logging import LogCaptureFixture

from github_label_sync.processing.exceptions import YAMLProcessingError
from github_label_sync.processing.yaml_processor import LabelsYAMLProcessor

VALID_YAML = """
labels:
  - name: bug
    color: d73a4a
    description: Something isn't working
  - name: help wanted
    color: '#008672'
"""

YAML_WITH_CATEGORIES = """
categories:
  - name: Type
    labels:
      - name: feature
        color: 00ff00
      - name: chore
        color: 000000
  - name: Priority
    labels:
      - name: high
        color: b60205
"""

YAML_MISSING_LABELS = """
not_labels:
  - name: Should not load
"""

YAML_EXTRA_FIELDS = """
labels:
  - name: bug
    color: d73a4a
    default: true
"""

YAML_INVALID_ENTRIES = """
labels:
  - name: valid
    color: ffffff
  - 12345
  - color: 00ff00
"""


def write_yaml(tmp_path: Path, name: str, content: str) -> str:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_load_valid_yaml(tmp_path: Path) -> None:
    """Test loading plain labels."""
    processor = LabelsYAMLProcessor()
    labels = processor.load_labels([write_yaml(tmp_path, "labels.yaml", VALID_YAML)])
    assert [label.name for label in labels] == ["bug", "help wanted"]
    assert labels[0].description == "Something isn't working"
    assert labels[1].color == "008672"
    assert all(label.status is None for label in labels)


def test_load_categories_prefixes_names(tmp_path: Path) -> None:
    """Test that labels grouped in categories get the category as a name prefix."""
    processor = LabelsYAMLProcessor()
    labels = processor.load_labels([write_yaml(tmp_path, "labels.yaml", YAML_WITH_CATEGORIES)])
    assert [label.name for label in labels] == ["Type: feature", "Type: chore", "Priority: high"]
    assert labels[1].color == "000000"


def test_multiple_files_are_merged_in_order(tmp_path: Path) -> None:
    """Test that labels from several files are concatenated in file order."""
    processor = LabelsYAMLProcessor()
    first = write_yaml(tmp_path, "first.yaml", VALID_YAML)
    second = write_yaml(tmp_path, "second.yaml", YAML_WITH_CATEGORIES)
    model = processor.load_labels_model([first, second])
    assert [label.name for label in model.labels] == ["bug", "help wanted"]
    assert [category.name for category in model.categories] == ["Type", "Priority"]


def test_missing_labels_key_raises(tmp_path: Path) -> None:
    """Test that a file with neither labels nor categories is an error."""
    processor = LabelsYAMLProcessor()
    with pytest.raises(YAMLProcessingError) as exc_info:
        processor.load_labels([write_yaml(tmp_path, "labels.yaml", YAML_MISSING_LABELS)])
    assert "Missing top-level" in exc_info.value.errors[0]["error"]


def test_malformed_yaml_raises(tmp_path: Path) -> None:
    """Test that unparsable YAML is reported as a processing error."""
    processor = LabelsYAMLProcessor()
    with pytest.raises(YAMLProcessingError):
        processor.load_labels([write_yaml(tmp_path, "bad.yaml", "not: [valid: yaml")])


def test_non_dict_yaml_raises(tmp_path: Path) -> None:
    """Test that a YAML list at the top level is rejected."""
    processor = LabelsYAMLProcessor()
    with pytest.raises(YAMLProcessingError) as exc_info:
        processor.load_labels([write_yaml(tmp_path, "list.yaml", "- name: bug\n")])
    assert exc_info.value.errors == [{"file": str(tmp_path / "list.yaml"), "error": "YAML file is not a dictionary"}]


def test_invalid_entries_collect_all_errors(tmp_path: Path) -> None:
    """Test that every invalid entry is reported and valid ones survive when not raising."""
    processor = LabelsYAMLProcessor(raise_on_error=False)
    labels = processor.load_labels([write_yaml(tmp_path, "labels.yaml", YAML_INVALID_ENTRIES)])
    assert [label.name for label in labels] == ["valid"]

    with pytest.raises(YAMLProcessingError) as exc_info:
        LabelsYAMLProcessor().load_labels([str(tmp_path / "labels.yaml")])
    assert [error["label_index"] for error in exc_info.value.errors] == [1, 2]


def test_extra_fields_are_logged_and_ignored(tmp_path: Path, caplog: LogCaptureFixture) -> None:
    """Test that unknown label fields are ignored with a warning."""
    processor = LabelsYAMLProcessor()
    with caplog.at_level("WARNING"):
        labels = processor.load_labels([write_yaml(tmp_path, "labels.yaml", YAML_EXTRA_FIELDS)])
    assert labels[0].name == "bug"
    assert "Extra fields in label will be ignored" in caplog.text


def test_missing_file_is_reported(tmp_path: Path) -> None:
    """Test that a missing file is collected as an error."""
    processor = LabelsYAMLProcessor(raise_on_error=False)
    assert processor.load_labels([str(tmp_path / "missing.yaml")]) == []


def test_processing_error_lists_failing_files(tmp_path: Path) -> None:
    """Test that the error message names each failing file once."""
    processor = LabelsYAMLProcessor()
    good = write_yaml(tmp_path, "good.yaml", VALID_YAML)
    bad = write_yaml(tmp_path, "list.yaml", "- name: bug\n")
    with pytest.raises(YAMLProcessingError) as exc_info:
        processor.load_labels([good, bad])
    assert exc_info.value.files == [bad]
    assert "1 error(s)" in str(exc_info.value)


@pytest.mark.parametrize(
    "color",
    [
        pytest.param("012345", id="leading zero"),
        pytest.param("000777", id="octal-looking"),
        pytest.param("00e000", id="float with zero exponent"),
        pytest.param("123e45", id="float with large exponent"),
        pytest.param("1e1000", id="float overflowing to infinity"),
    ],
)
def test_unquoted_numeric_colors_keep_their_digits(tmp_path: Path, color: str) -> None:
    """Test that hex colours YAML would read as numbers are loaded exactly as written."""
    processor = LabelsYAMLProcessor()
    labels = processor.load_labels([write_yaml(tmp_path, "labels.yaml", f"labels:\n  - name: bug\n    color: {color}\n")])
    assert labels[0].color == color


def test_numeric_label_names_are_loaded_as_text(tmp_path: Path) -> None:
    """Test that numeric names and descriptions are not rejected as non-strings."""
    processor = LabelsYAMLProcessor()
    labels = processor.load_labels([write_yaml(tmp_path, "labels.yaml", "labels:\n  - name: 2024\n    description: 1.5\n")])
    assert labels[0].name == "2024"
    assert labels[0].description == "1.5"
