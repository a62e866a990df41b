"""HTTP service hosting named generator streams."""
