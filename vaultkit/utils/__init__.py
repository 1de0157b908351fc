"""Logging and masking utilities."""
