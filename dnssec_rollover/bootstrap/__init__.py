"""Composition root for wiring dependencies.

This package centralizes infrastructure-aware wiring so the CLI and the
application layer depend on ports without importing infrastructure
directly.
"""
