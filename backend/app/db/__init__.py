"""Database Infrastructure: declarative Base, session factory and demo seed data.

Invariants:
    - Single async engine per process for the API (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
