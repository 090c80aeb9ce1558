"""CD catalog backend."""
