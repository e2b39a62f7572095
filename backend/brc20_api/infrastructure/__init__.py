"""Infrastructure - IO shell: database sessions, SQL ledger store, response cache, logging.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Only layer that imports SQLAlchemy engines and sessions
"""
