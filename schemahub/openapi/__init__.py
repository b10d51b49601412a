"""Module __init__: OpenAPI document aggregation."""
#
# PIPELINE:
#   template.py  -> base document skeleton
#   merge.py     -> overrides + service fragments + action path entries
#   security.py  -> which operations make it into the public document
#   cache.py     -> holds both documents, invalidated on registry changes
#
from schemahub.openapi.cache import SchemaCache
from schemahub.openapi.merge import SchemaBuilder, deep_merge, parse_path_spec
from schemahub.openapi.security import BEARER_SCHEME, accept
from schemahub.openapi.template import build_template

__all__ = [
    "BEARER_SCHEME",
    "SchemaBuilder",
    "SchemaCache",
    "accept",
    "build_template",
    "deep_merge",
    "parse_path_spec",
]
