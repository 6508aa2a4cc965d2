"""Unit tests for the label schema models."""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from github_label_sync.schemas.labels import LabelCategoryModel, LabelModel, LabelsYAMLModel, LabelStatus


@pytest.mark.parametrize(
    "color, expected",
    [
        pytest.param("d73a4a", "d73a4a", id="plain hex"),
        pytest.param("#d73a4a", "d73a4a", id="leading hash"),
        pytest.param(0, "000000", id="all zeros read as int"),
        pytest.param(1100, "001100", id="leading zeros read as int"),
        pytest.param(None, None, id="no color"),
    ],
)
def test_color_normalization(color: object, expected: str | None) -> None:
    """Test that colors are stored without '#' and integer colors are zero padded."""
    assert LabelModel(name="bug", color=color).color == expected


def test_name_must_be_a_string() -> None:
    """Test that a non-string name is rejected."""
    with pytest.raises(ValidationError):
        LabelModel(name=12345)


def test_status_is_mutable() -> None:
    """Test that the status can be written after construction."""
    label = LabelModel(name="bug")
    label.status = LabelStatus.DUPLICATE
    assert label.status == "duplicate"


def test_from_github_copies_name_color_description() -> None:
    """Test building a label from a GitHub label object."""
    label = LabelModel.from_github(SimpleNamespace(name="bug", color="d73a4a", description="Broken", id=42))
    assert label == LabelModel(name="bug", color="d73a4a", description="Broken")


def test_flatten_prefixes_category_labels() -> None:
    """Test that category labels are flattened as '<category>: <label>' after plain labels."""
    model = LabelsYAMLModel(
        labels=[LabelModel(name="bug", color="d73a4a")],
        categories=[LabelCategoryModel(name="Type", labels=[LabelModel(name="feature", color="00ff00")])],
    )
    flattened = model.flatten()
    assert [label.name for label in flattened] == ["bug", "Type: feature"]
    assert flattened[1].color == "00ff00"
    # The category's own label is left untouched.
    assert model.categories[0].labels[0].name == "feature"
