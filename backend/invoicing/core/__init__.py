"""Core Layer — invoice aggregate and rule sets, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - Aggregate methods mutate only the aggregate they are called on

Design Decisions:
    - Pure core separated from the IO shell: the aggregate is tested without a database
"""
