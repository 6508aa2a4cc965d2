"""Handles reading desired labels from YAML files.

This module provides the LabelsYAMLProcessor class, which loads and validates labels from
YAML files according to a Pydantic schema. Labels may be listed directly under a top-level
'labels' key or grouped under 'categories', in which case each label name is prefixed with
its category name. All logging is performed using structlog.
"""

from typing import Any

import structlog
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from structlog.stdlib import BoundLogger

from github_label_sync.processing.exceptions import YAMLProcessingError
from github_label_sync.schemas.labels import LabelCategoryModel, LabelModel, LabelsYAMLModel

logger: BoundLogger = structlog.get_logger(__name__)  # type: ignore


class LabelFileConstructor(SafeConstructor):
    """Safe constructor that keeps numeric scalars as the text written in the file.

    Hex colours such as 000777, 00e000 or 123e45 would otherwise resolve to
    ints or floats and lose their digits.
    """

    def construct_numeric_as_text(self, node: Any) -> str:
        return str(self.construct_scalar(node))


LabelFileConstructor.add_constructor("tag:yaml.org,2002:int", LabelFileConstructor.construct_numeric_as_text)
LabelFileConstructor.add_constructor("tag:yaml.org,2002:float", LabelFileConstructor.construct_numeric_as_text)

yaml = YAML(typ="safe")
yaml.Constructor = LabelFileConstructor

LABEL_FIELDS = {"name", "color", "description"}


class LabelsYAMLProcessor:
    """Loads and validates desired labels from one or more YAML files.

    Labels from every file are merged in the order the files are given. All
    validation errors are collected before anything is raised.
    """

    def __init__(self, raise_on_error: bool = True) -> None:
        """Initialize the processor.

        Args:
            raise_on_error (bool): Whether to raise a YAMLProcessingError on validation errors.
        """
        self.raise_on_error = raise_on_error

    def load_labels_model(self, yaml_paths: list[str]) -> LabelsYAMLModel:
        """Load and validate labels and categories from one or more YAML files."""
        all_labels: list[LabelModel] = []
        all_categories: list[LabelCategoryModel] = []
        errors: list[dict[str, Any]] = []
        for path in yaml_paths:
            data = self._load_yaml_file(path, errors)
            if data is None:
                continue
            if "labels" not in data and "categories" not in data:
                logger.error("YAML file has neither a top-level 'labels' nor 'categories' key", path=path)
                errors.append({"file": path, "error": "Missing top-level 'labels' or 'categories' key"})
                continue
            all_labels.extend(self._validate_labels(data.get("labels") or [], path, errors))
            for category_index, category in enumerate(data.get("categories") or []):
                if not isinstance(category, dict) or "name" not in category:
                    logger.warning("Category entry has no name and will be skipped", file=path, category_index=category_index)
                    errors.append({"file": path, "category_index": category_index, "error": "Category entry has no name"})
                    continue
                category_labels = self._validate_labels(category.get("labels") or [], path, errors, category=str(category["name"]))
                all_categories.append(LabelCategoryModel(name=str(category["name"]), labels=category_labels))
        if errors:
            logger.error("One or more errors occurred during YAML processing", errors=errors)
            if self.raise_on_error:
                raise YAMLProcessingError(errors)
        return LabelsYAMLModel(labels=all_labels, categories=all_categories)

    def load_labels(self, yaml_paths: list[str]) -> list[LabelModel]:
        """Load labels from YAML files, flattening categories into prefixed label names."""
        return self.load_labels_model(yaml_paths).flatten()

    def _validate_labels(
        self,
        entries: list[Any],
        path: str,
        errors: list[dict[str, Any]],
        category: str | None = None,
    ) -> list[LabelModel]:
        labels: list[LabelModel] = []
        for idx, label_dict in enumerate(entries):
            location: dict[str, Any] = {"file": path, "label_index": idx}
            if category is not None:
                location["category"] = category
            if not isinstance(label_dict, dict):
                logger.warning(
                    "Label entry is not a dict and will be skipped",
                    actual_type=type(label_dict).__name__,
                    **location,
                )
                errors.append({**location, "error": "Label entry is not a dict"})
                continue
            extra_fields = set(label_dict.keys()) - LABEL_FIELDS
            if extra_fields:
                logger.warning("Extra fields in label will be ignored", extra_fields=sorted(extra_fields), **location)
            filtered = {k: v for k, v in label_dict.items() if k in LABEL_FIELDS}
            try:
                labels.append(LabelModel(**filtered))
            except ValidationError as ve:
                logger.error("Validation error for label", error=ve.errors(), **location)
                errors.append({**location, "error": ve.errors()})
        return labels

    def _load_yaml_file(self, path: str, errors: list[dict[str, Any]]) -> dict[str, Any] | None:
        try:
            with open(path, encoding="utf-8") as f:
                data: dict[str, Any] = yaml.load(f)  # type: ignore
            # If loaded data is not a dictionary, throw an error.
            if not isinstance(data, dict):
                logger.error("YAML file is not a dictionary", path=path)
                errors.append({"file": path, "error": "YAML file is not a dictionary"})
                return None
            return data
        except Exception as e:
            logger.error("Failed to parse YAML file", path=path, error=str(e))
            errors.append({"file": path, "error": str(e)})
            return None
