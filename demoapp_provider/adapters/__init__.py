"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (HTTP, filesystem and
    in-memory test doubles) used by the resources.

Dependencies:
    The REST adapters depend on ``requests``; ``state_local`` uses the
    filesystem only.

Call context:
    Imported by the provider composition root (for runtime wiring) and by tests
    (for doubles and transport-level behavior verification).
"""
