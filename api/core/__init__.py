"""
Core utilities shared across the mock API.

This package hosts:
- configuration helpers (env vars, paths, feature flags)
- logging setup
- ASGI middlewares (rewrite rules, no-cache headers, read-only guard,
  request log)

Routers and services should depend on these primitives instead of reading
the environment themselves.
"""
