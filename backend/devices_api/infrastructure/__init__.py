"""Infrastructure Layer — database session management, SQL repository and logging.

Invariants:
    - SQLAlchemy exceptions never escape as-is: mapped to IntegrityViolation or DatabaseError
"""
