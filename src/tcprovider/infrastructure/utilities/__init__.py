"""Shared infrastructure utilities."""
