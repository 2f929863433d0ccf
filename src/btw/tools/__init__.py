"""Tool registry and the built-in btw tools."""
