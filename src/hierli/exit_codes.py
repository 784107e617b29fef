"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~hierli.exceptions.HierliError` subclass.
Shell wrappers can inspect the exit code to tell a malformed spec apart from
a spec whose operations cannot be arranged into a hierarchy.

Example::

    $ hierli hierarchy openapi.yaml --prefix /api/v2/
    $ echo $?
    4   # EXIT_HIERARCHY_CONFLICT -- two operations claim the same verb
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SPEC_PARSE_ERROR = 3
"""The OpenAPI document could not be loaded, parsed or validated."""

EXIT_HIERARCHY_CONFLICT = 4
"""The operations in the document could not be merged into one hierarchy."""
