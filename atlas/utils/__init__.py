"""Utilities shared across Atlas modules."""
