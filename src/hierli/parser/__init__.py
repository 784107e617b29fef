"""OpenAPI document loading.

Turns a file path, URL or stdin into a plain dict and rejects documents that
are not OpenAPI 3.x, before the hierarchy engine ever sees them.

Typical usage::

    from hierli.parser import load_spec, validate_openapi_version

    raw = load_spec("openapi.yaml")
    validate_openapi_version(raw)
"""

from hierli.parser.loader import load_spec, validate_openapi_version

__all__ = ["load_spec", "validate_openapi_version"]
