"""Shared services (money helpers)."""
