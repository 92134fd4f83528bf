"""
Core utilities shared across mobilestore.

This package hosts configuration helpers (env vars, matching policy flags),
the error taxonomy and logging setup for the process entry point.
"""
