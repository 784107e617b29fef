"""hierli -- Infer a command hierarchy from an OpenAPI 3.x spec.

This package reads an OpenAPI document, works out which path segments name
resources and which operation-identifier fragments name actions, and builds
a tree that groups operations by resource, then by entity, then by verb.
The tree can be printed for inspection or rendered as a Typer command tree.

Typical workflow::

    hierli hierarchy openapi.yaml --prefix /api/v1/   # inferred tree as JSON
    hierli tree openapi.yaml --prefix /api/v1/        # rendered commands
    hierli run openapi.yaml -P /api/v1/ -- group list

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for configuration and the hierarchy.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
