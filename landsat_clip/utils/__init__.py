"""Filesystem and string helpers shared across the pipeline."""
