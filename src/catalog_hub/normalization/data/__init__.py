"""Packaged category and tier tables."""
