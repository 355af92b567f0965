"""
Loading of serialized class syntax trees.

Front-ends hand their syntax trees over as JSON or YAML documents. A
document holds either a single class, a list of classes, or a mapping
with a ``classes`` key.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import make_input_error
from .syntax import ClassNode

logger = logging.getLogger(__name__)

JSON_SUFFIXES = {".json"}
YAML_SUFFIXES = {".yaml", ".yml"}


def _read_document(path: Path) -> Any:
    if not path.exists():
        raise make_input_error(f"Syntax tree file not found: {path}")
    if not path.is_file():
        raise make_input_error(f"Syntax tree path is not a file: {path}", path)

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise make_input_error(f"Cannot read syntax tree file: {e}", path) from e
    suffix = path.suffix.lower()
    try:
        if suffix in JSON_SUFFIXES:
            return json.loads(content)
        if suffix in YAML_SUFFIXES:
            return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise make_input_error(f"Malformed syntax tree document: {e}", path) from e

    raise make_input_error(
        f"Unsupported syntax tree format '{path.suffix}'; expected .json, .yaml or .yml",
        path,
    )


def _class_entries(data: Any, path: Path) -> list[dict[str, Any]]:
    if isinstance(data, dict) and "classes" in data:
        data = data["classes"]
    elif isinstance(data, dict):
        data = [data]

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise make_input_error("Expected a class mapping or a list of class mappings", path)
    return data


def classes_from_data(data: Any, source: Path) -> list[ClassNode]:
    """
    Validate already-decoded document data into class syntax trees.

    Classes that do not name a ``source_file`` are attributed to ``source``.
    """
    classes: list[ClassNode] = []
    for index, entry in enumerate(_class_entries(data, source)):
        entry = {"source_file": str(source), **entry}
        try:
            classes.append(ClassNode.model_validate(entry))
        except ValidationError as e:
            name = entry.get("name", f"#{index}")
            raise make_input_error(f"Invalid syntax tree for class {name}:\n{e}", source) from e
    return classes


def load_classes(path: Path) -> list[ClassNode]:
    """
    Load all class syntax trees from a JSON or YAML file.

    Raises:
        InputError: If the file is missing, malformed, or fails validation
    """
    classes = classes_from_data(_read_document(path), path)
    logger.debug("Loaded %d class(es) from %s", len(classes), path)
    return classes
