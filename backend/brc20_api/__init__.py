"""BRC-20 Ledger Query API - read-side façade over the BRC-20 token ledger.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
