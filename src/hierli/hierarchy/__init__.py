"""Hierarchy inference -- turn an OpenAPI document into an entity tree.

This sub-package is the core of hierli. It reads operation identifiers and
URL paths from an already loaded spec and produces a
:class:`~hierli.models.Hierarchy` that groups operations by resource path,
then by inferred entity, then by verb.

Typical usage::

    from hierli.hierarchy import build_hierarchy

    hierarchy = build_hierarchy(raw_spec, "/api/atlas/v2/")
    for key_path, entry in hierarchy.walk():
        print("/".join(key_path), entry.entity_name, sorted(entry.verbs))

Sub-modules:

* :mod:`~hierli.hierarchy.path` -- Typed path templates (constant vs.
  parameter segments).
* :mod:`~hierli.hierarchy.walker` -- Walk the document's ``paths`` into a raw
  trie keyed by constant segments.
* :mod:`~hierli.hierarchy.inference` -- Two-pass entity and verb discovery
  over operation identifiers.
* :mod:`~hierli.hierarchy.builder` -- Convert the trie into the entity tree
  and merge siblings that resolve to the same entity.
"""

from hierli.hierarchy.builder import (
    build_entry,
    build_hierarchy,
    hierarchy_from_trie,
    merge_entries,
)
from hierli.hierarchy.inference import Inference, infer_verbs
from hierli.hierarchy.path import Constant, Parameter, Path, parse_path
from hierli.hierarchy.walker import RawEntry, WalkResult, walk_spec

__all__ = [
    "Constant",
    "Inference",
    "Parameter",
    "Path",
    "RawEntry",
    "WalkResult",
    "build_entry",
    "build_hierarchy",
    "hierarchy_from_trie",
    "infer_verbs",
    "merge_entries",
    "parse_path",
    "walk_spec",
]
