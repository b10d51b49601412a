# ============================================================================
# schemahub/__init__.py
# Package Marker for the SchemaHub Backend
# ============================================================================
#
# PURPOSE:
# SchemaHub walks a live registry of services and their actions and stitches
# the OpenAPI fragments they contribute into two documents: a public one
# (bearer-authenticated operations only) and a private one (everything).
#
# LAYOUT:
# - base/: configuration and logging setup
# - registry/: service descriptors, the in-process registry and its event bus
# - openapi/: template, merge engine, security filter, document cache
# - server/: FastAPI application serving the documents
#
# ============================================================================

__version__ = "1.0.0"
