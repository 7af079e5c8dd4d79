"""Command-line interface for LockShield."""
