"""Core Layer — pure ledger rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, infrastructure/, models/ or db/
    - All functions are pure and deterministic; violations raise LedgerError

Design Decisions:
    - Functional core separated from imperative shell: services/ does the IO
      and calls into these rules with plain records
"""
