"""Read application documents out of an exported issue tracker dump.

Each issue carries one application serialized as JSON text in its body,
sometimes wrapped in extra prose. Region filtering uses the issue labels.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def parse_issue_body(body: Any) -> dict[str, Any] | None:
    """Parse an issue body into an application document.

    Tries the whole body first, then the slice between the first ``{`` and
    the last ``}``. Returns None when neither yields a JSON object.
    """
    if not isinstance(body, str) or not body.strip():
        return None

    candidates = [body]
    first, last = body.find("{"), body.rfind("}")
    if 0 <= first < last:
        candidates.append(body[first : last + 1])

    for text in candidates:
        try:
            parsed = json.loads(text)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def _issue_field(issue: dict[str, Any], name: str) -> Any:
    return issue.get(name, issue.get(name.capitalize()))


def has_region(issue: dict[str, Any], region: str) -> bool:
    labels = _issue_field(issue, "labels") or []
    wanted = region.strip().casefold()
    for label in labels:
        # Labels are plain strings in exports, objects with a name via the API.
        name = label.get("name") if isinstance(label, dict) else label
        if isinstance(name, str) and name.strip().casefold() == wanted:
            return True
    return False


def iter_application_documents(
    issues: Iterable[Any],
    region: str = "",
) -> Iterator[dict[str, Any]]:
    """Yield the application document of every issue that passes the region filter."""
    skipped = 0
    for issue in issues:
        if not isinstance(issue, dict):
            skipped += 1
            continue
        if region and not has_region(issue, region):
            continue
        doc = parse_issue_body(_issue_field(issue, "body"))
        if doc is None:
            skipped += 1
            logger.debug("Issue %r has no parseable application body", _issue_field(issue, "number"))
            continue
        yield doc
    if skipped:
        logger.warning("Skipped %d issue(s) without a parseable application body", skipped)


def load_issues(path: str | Path) -> list[Any]:
    """Load an issue dump from a JSON file.

    The file must contain a JSON array, or a JSON object with a top-level
    ``issues`` key holding one.

    Raises:
        FileNotFoundError: If the path does not exist.
        ValueError: If the JSON is malformed or has the wrong shape.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Issue dump not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Issue dump {path} is not valid JSON: {exc}") from exc

    if isinstance(raw, dict):
        if "issues" not in raw:
            raise ValueError("Issue dump JSON object must contain an 'issues' key.")
        raw = raw["issues"]

    if not isinstance(raw, list):
        raise ValueError("Issue dump must be a JSON array or object with 'issues' array.")
    return raw
