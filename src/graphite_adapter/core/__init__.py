"""Transport, cache, error and duration primitives."""
