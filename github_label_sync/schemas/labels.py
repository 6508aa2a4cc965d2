"""Pydantic schema for GitHub labels and the desired-labels YAML structure."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class LabelStatus(str, Enum):
    """Outcome of the last remote operation performed on a label."""

    SUCCESS = "success"
    DUPLICATE = "duplicate"
    ERROR = "error"


class LabelModel(BaseModel):
    """Pydantic model for a GitHub label.

    Instances are mutable on purpose: the synchronizer records the outcome of
    each remote operation on the label object itself.
    """

    name: str
    color: str | None = None
    description: str | None = None
    status: LabelStatus | None = None

    @field_validator("color", mode="before")
    @classmethod
    def normalize_color(cls, value: Any) -> Any:
        """Accept '#rrggbb' and integer colors, zero-padded to six digits."""
        if isinstance(value, int) and not isinstance(value, bool):
            return f"{value:06d}"
        if isinstance(value, str):
            return value.lstrip("#")
        return value

    @classmethod
    def from_github(cls, label: Any) -> "LabelModel":
        """Build a label from a githubkit Label (or any object with name/color/description)."""
        return cls(
            name=label.name,
            color=getattr(label, "color", None),
            description=getattr(label, "description", None),
        )


class ResponseMeta(BaseModel):
    """Metadata GitHub returns alongside a list response."""

    status_code: int
    link: str | None = None
    rate_limit: dict[str, str] = Field(default_factory=dict)


class LabelSnapshot(BaseModel):
    """The remote label set as fetched at a point in time."""

    labels: list[LabelModel]
    meta: ResponseMeta | None = None

    def names(self) -> list[str]:
        """Return label names in the order GitHub listed them."""
        return [label.name for label in self.labels]


class LabelCategoryModel(BaseModel):
    """Pydantic model for a named group of labels.

    Labels inside a category are created on GitHub as "<category>: <label>".
    """

    name: str
    labels: list[LabelModel] = Field(default_factory=list)


class LabelsYAMLModel(BaseModel):
    """Pydantic model for a desired-labels YAML file."""

    labels: list[LabelModel] = Field(default_factory=list)
    categories: list[LabelCategoryModel] = Field(default_factory=list)

    def flatten(self) -> list[LabelModel]:
        """Return plain labels followed by category labels with prefixed names."""
        flattened = list(self.labels)
        for category in self.categories:
            for label in category.labels:
                flattened.append(label.model_copy(update={"name": f"{category.name}: {label.name}"}))
        return flattened
