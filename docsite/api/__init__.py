"""HTTP API over the docs index."""
