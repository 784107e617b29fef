"""Load OpenAPI documents from a local file, a URL, or stdin.

The hierarchy engine works on plain dicts and never re-validates them, so
this module is where malformed input is rejected. Both JSON and YAML are
accepted; the format is guessed from the file extension or the response's
content type and falls back to trying JSON first, then YAML.

* :func:`load_spec` -- read and parse a document from any supported source.
* :func:`validate_openapi_version` -- reject Swagger 2.x and anything that
  is not an OpenAPI 3.x document.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from hierli.exceptions import SpecParseError

_URL_SCHEMES = ("http://", "https://")


def load_spec(source: str, timeout: float = 30.0) -> dict[str, Any]:
    """Load an OpenAPI document from a URL, a file path, or ``-`` for stdin.

    Args:
        source: Where to read the document from.
        timeout: Timeout in seconds for URL sources.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SpecParseError: If the source cannot be read or is neither valid
            JSON nor valid YAML.
    """
    if source == "-":
        content, hint = sys.stdin.read(), ""
        origin = "stdin"
    elif source.startswith(_URL_SCHEMES):
        content, hint = _fetch(source, timeout)
        origin = source
    else:
        content, hint = _read_file(Path(source))
        origin = source

    if not content.strip():
        raise SpecParseError(f"Spec is empty: {origin}")
    return _parse_content(content, hint=hint)


def _fetch(url: str, timeout: float) -> tuple[str, str]:
    """Fetch *url* and return its body plus a format hint from the content type."""
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    return response.text, hint


def _read_file(path: Path) -> tuple[str, str]:
    """Read *path* and return its text plus a format hint from the extension."""
    if not path.is_file():
        raise SpecParseError(f"Spec file not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    suffix = path.suffix.lower()
    if suffix == ".json":
        return content, "json"
    if suffix in (".yaml", ".yml"):
        return content, "yaml"
    return content, ""


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON or YAML and require a top-level mapping.

    JSON is tried first unless *hint* says ``yaml``; a ``json`` hint disables
    the YAML fallback.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise SpecParseError(
        "Failed to parse spec as JSON or YAML\n  " + "\n  ".join(errors)
    )


def _require_mapping(document: Any) -> dict[str, Any]:  # noqa: ANN401
    if not isinstance(document, dict):
        kind = "empty document" if document is None else type(document).__name__
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return document


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Validate and return the document's OpenAPI version string.

    Args:
        spec: The parsed document.

    Returns:
        The ``openapi`` version (e.g. ``"3.0.3"``).

    Raises:
        SpecParseError: For Swagger 2.x documents, documents without an
            ``openapi`` field, and non-3.x versions.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Only OpenAPI 3.x documents are supported."
        )

    version = spec.get("openapi")
    if version is None:
        raise SpecParseError(
            "Missing 'openapi' field. Is this an OpenAPI 3.x document?"
        )

    version_str = str(version)
    if not version_str.startswith("3."):
        raise SpecParseError(
            f"Unsupported OpenAPI version: {version_str}. "
            "Only OpenAPI 3.x documents are supported."
        )
    return version_str
