"""Infrastructure adapters (logging, response formatters)."""
