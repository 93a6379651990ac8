"""Shared helpers for schemadoc."""
