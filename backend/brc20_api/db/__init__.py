"""Database Metadata - declarative Base shared by models and Alembic.

Invariants:
    - Single async engine per process (initialized via init_db)
    - The API never writes through these models; ingestion owns all writes
"""
