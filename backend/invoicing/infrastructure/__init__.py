"""Infrastructure Layer — database access, repositories and logging setup.

Invariants:
    - Infrastructure implements the Protocols declared in core/repository_protocols.py
    - SQLAlchemy errors never escape unmapped (see database.py)

Design Decisions:
    - Repository maps ORM records to the plain aggregate; core never sees an ORM object
"""
