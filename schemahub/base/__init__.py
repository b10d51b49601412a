"""Module __init__: foundational pieces the rest of SchemaHub depends on."""
#
# WHAT'S IN THIS MODULE:
# - config.py: Application configuration (docs routes, credentials, snapshots, logging)
#
