"""HTTP API for AOZ Core."""
