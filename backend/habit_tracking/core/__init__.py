"""Core Layer — pure habit domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All mutation is synchronous and scoped to a single Habit

Design Decisions:
    - Functional core separated from imperative shell
"""
