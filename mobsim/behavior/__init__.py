"""Species behavior: the shared action pipeline and per-species hooks."""
