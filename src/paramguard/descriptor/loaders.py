"""Annotation loading utilities for paramguard.

Documentation annotations normally come from a docstring parser. Callers that
keep them next to the code in YAML or JSON can load them here instead:

```yaml
parameters:
  count:
    description: How many items to fetch
    type: int
    rules:
      - rule: min
        args: [1]
  tags:
    type: string[]
    rules: [nonempty]
```
"""

import json
from pathlib import Path

import yaml

from .models import ParameterAnnotation


def load_annotations(content: str, format: str = "yaml") -> dict[str, ParameterAnnotation]:
    """Load documentation annotations keyed by parameter name.

    The parameters may sit at the top level or under a ``parameters`` key.
    A parameter given as a bare string is taken as its type; an empty
    document yields no annotations.

    Raises:
        ValueError: If the format is unknown, parsing fails, or the document
            is not a mapping
        pydantic.ValidationError: If an entry is not a valid annotation
    """
    if format == "yaml":
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML: {e}") from e
    elif format == "json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON: {e}") from e
    else:
        raise ValueError(f"Unsupported format: {format}. Use 'yaml' or 'json'")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping of parameters, got {type(data).__name__}")
    if isinstance(data.get("parameters"), dict):
        data = data["parameters"]

    annotations = {}
    for name, entry in data.items():
        if isinstance(entry, str):
            entry = {"type": entry}
        elif entry is None:
            entry = {}
        annotations[str(name)] = ParameterAnnotation.model_validate(entry)
    return annotations


def load_annotations_from_file(path: str | Path) -> dict[str, ParameterAnnotation]:
    """Load documentation annotations from a YAML or JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported or parsing fails
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Annotation file not found: {path}")

    if path.suffix.lower() in [".yaml", ".yml"]:
        format = "yaml"
    elif path.suffix.lower() == ".json":
        format = "json"
    else:
        raise ValueError(f"Unsupported file extension: {path.suffix}. Use .yaml, .yml, or .json")

    content = path.read_text(encoding="utf-8")
    return load_annotations(content, format=format)
