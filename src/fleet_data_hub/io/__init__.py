"""I/O layer: collection repositories."""
