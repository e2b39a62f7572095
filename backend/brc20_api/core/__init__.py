"""Core Layer - pure query semantics, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (protocols only declare async IO)
"""
