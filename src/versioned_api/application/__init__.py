"""Application layer.

Build-time registration (registry, group builder, controller metadata) and
per-request negotiation (media type parsing, version resolution).
"""
