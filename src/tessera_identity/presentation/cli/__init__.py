"""Maintenance command-line interface."""
