"""Database Metadata — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - One metadata object for the whole application

Design Decisions:
    - Engine and sessions live in infrastructure/database.py, not here
"""
