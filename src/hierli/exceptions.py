"""Exception hierarchy for hierli.

All exceptions inherit from :class:`HierliError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`hierli.exit_codes`.
The top-level error handler in :func:`hierli.app.main` catches
``HierliError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    HierliError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- SpecParseError          (exit 3)
    +-- HierarchyError          (exit 4)
    |   +-- VerbCollisionError
    |   +-- EntityMismatchError
    +-- ConfigError             (exit 1)
"""

from __future__ import annotations

from typing import Optional

from hierli.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_HIERARCHY_CONFLICT,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class HierliError(Exception):
    """Base exception for all hierli errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`hierli.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(HierliError):
    """Raised for invalid CLI arguments or option values."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(HierliError):
    """Raised when the OpenAPI spec cannot be loaded, parsed, or fails validation."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class HierarchyError(HierliError):
    """Raised when the operations of a spec cannot be arranged into one hierarchy.

    Building is all-or-nothing: once this is raised no partial
    :class:`~hierli.models.Hierarchy` is returned to the caller.
    """

    exit_code = EXIT_HIERARCHY_CONFLICT


class VerbCollisionError(HierarchyError):
    """Raised when two operation identifiers claim the same verb on one entry.

    Args:
        verb: The verb both identifiers resolve to.
        existing: The identifier already registered for *verb*.
        incoming: The identifier that tried to register *verb* again.
        entity_name: Entity of the entry the collision happened on, if any.
    """

    def __init__(
        self,
        verb: str,
        existing: str,
        incoming: str,
        entity_name: Optional[str] = None,
    ):
        where = f"entity '{entity_name}'" if entity_name is not None else "an unnamed entry"
        super().__init__(
            f"Verb '{verb}' on {where} is claimed by both "
            f"'{existing}' and '{incoming}'"
        )
        self.verb = verb
        self.existing = existing
        self.incoming = incoming
        self.entity_name = entity_name


class EntityMismatchError(HierarchyError):
    """Raised when merging two entries whose entity names differ."""

    def __init__(self, target: Optional[str], source: Optional[str]):
        super().__init__(
            f"Cannot merge entity '{source}' into entity '{target}'"
        )
        self.target = target
        self.source = source


class ConfigError(HierliError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
