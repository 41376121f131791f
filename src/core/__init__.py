"""Core: configuration, domain and services (no I/O)."""
