"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants (EPSG prefixes, metadata naming, margins)
- exceptions: Custom exception hierarchy
"""
