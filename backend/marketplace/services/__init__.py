"""Services Layer — the imperative shell around the pure ledger rules.

Invariants:
    - Module functions take an explicit LedgerTransaction as first argument
    - Only LedgerService opens transactions

Design Decisions:
    - Impureim sandwich: load records -> core rule -> persist, per operation
"""
