"""Use-case layer exposing the declarative resources to an orchestrator.

Each module coordinates domain objects and ports without performing transport
I/O directly.
"""
