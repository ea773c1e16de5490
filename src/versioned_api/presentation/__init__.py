"""Presentation layer: dispatch, HTTP adapters, error translation."""
