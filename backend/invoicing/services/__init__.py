"""Services Layer — one handler per invoice use case.

Invariants:
    - Handlers orchestrate: rule set -> load -> aggregate operation -> persist -> map
    - Domain errors are converted at the operation boundary, never propagated raw

Design Decisions:
    - Header use cases and line use cases split into two handler classes
"""
