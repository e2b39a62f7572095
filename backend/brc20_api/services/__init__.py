"""Services - orchestrate normalization, snapshot reads and response shaping.

Invariants:
    - Services receive a LedgerStore (Protocol), never a raw DB session
    - Pure formatting and validation live in core/; services only sequence them
"""
