"""Test suite for versioned_api.

- unit/: Isolated tests of parsing, registry, resolution, building, dispatch
- api/: HTTP round trips through the ASGI application
"""
