# ============================================================================
# schemahub/server/__init__.py
# Server Package - FastAPI Web Server
# ============================================================================
#
# KEY ENDPOINTS:
# - GET /openapi.json - Public (bearer-only) document
# - GET /openapi-private.json - Unfiltered document, Basic credentials required
# - GET /health - Liveness and cache status
#
# KEY MODULES:
# - **api.py**: Application factory and serve()
# - **state.py**: ApplicationState (registry, bus, cache) attached to the app
# - **routers/**: Route groups
#
# ============================================================================
