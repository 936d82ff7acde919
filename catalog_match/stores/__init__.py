"""Data stores for persistence and locking.

Stores handle:
- PostgreSQL: DB session, ORM operations
- Redis: per-offer review locks, TTL policies

No business/matching logic in stores - that belongs in services.
"""
