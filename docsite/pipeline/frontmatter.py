"""Front-matter splitting and YAML parsing for Markdown sources."""

from __future__ import annotations

import datetime
import math

import yaml

from docsite.domain.document import FrontMatterValue
from docsite.errors import FrontMatterError

_OPEN = "---"
_CLOSE = ("---", "...")


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Split raw file text into a front-matter block and a body.

    Args:
        text: Full file contents

    Returns:
        (block, body). ``block`` is None when the file has no leading delimiter.

    Raises:
        FrontMatterError: If the block is opened but never closed
    """
    if text.startswith("\ufeff"):
        text = text[1:]
    text = text.replace("\r\n", "\n")

    lines = text.split("\n")
    if lines[0].rstrip() != _OPEN:
        return None, text

    for i in range(1, len(lines)):
        if lines[i].rstrip() in _CLOSE:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :])

    raise FrontMatterError("front-matter block is not closed")


def normalize_value(value, _active: set[int] | None = None) -> FrontMatterValue:
    """Map YAML scalars and containers onto JSON-safe values.

    Raises:
        FrontMatterError: If a container refers back to itself through anchors
    """
    if isinstance(value, float) and not math.isfinite(value):
        # JSON has no NaN or Infinity
        return None
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    # datetime is a subclass of date
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if not isinstance(value, (list, tuple, set, dict)):
        return str(value)

    active = _active if _active is not None else set()
    if id(value) in active:
        raise FrontMatterError("recursive front matter")
    active.add(id(value))
    try:
        if isinstance(value, dict):
            return {str(k): normalize_value(v, active) for k, v in value.items()}
        return [normalize_value(v, active) for v in value]
    finally:
        active.discard(id(value))


def parse_front_matter(text: str) -> tuple[dict[str, FrontMatterValue], str]:
    """Parse front matter and return (metadata, body).

    Raises:
        FrontMatterError: If the YAML is malformed or not a mapping
    """
    block, body = split_front_matter(text)
    if block is None:
        return {}, body

    try:
        data = yaml.safe_load(block)
    except (yaml.YAMLError, ValueError) as e:
        # impossible dates such as 2024-02-30 surface as ValueError
        raise FrontMatterError(f"invalid YAML front matter: {e}") from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"front matter must be a mapping, got {type(data).__name__}"
        )
    return normalize_value(data), body
