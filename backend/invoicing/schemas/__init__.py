"""Pydantic Schemas — request/response contracts for the invoice API.

Invariants:
    - Schemas validate shape at the system boundary (types, required keys)
    - Field rules with user-facing messages live in core/enforce_invoice_rules.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
