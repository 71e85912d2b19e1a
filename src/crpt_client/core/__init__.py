"""Domain model, ports and use cases (no I/O)."""
