"""
Block resolution: visibility, alias merging, coercion, routing and the
parameter builder that runs them in order.
"""

from blockflow.services.resolution.aliases import merge_aliases
from blockflow.services.resolution.builder import resolve
from blockflow.services.resolution.coercion import coerce
from blockflow.services.resolution.conditions import evaluate
from blockflow.services.resolution.engine import ResolutionEngine
from blockflow.services.resolution.routing import resolve_tool
from blockflow.services.resolution.visibility import resolve_active_fields

__all__ = [
    "ResolutionEngine",
    "coerce",
    "evaluate",
    "merge_aliases",
    "resolve",
    "resolve_active_fields",
    "resolve_tool",
]
