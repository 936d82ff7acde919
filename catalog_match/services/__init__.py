"""Matching and review services.

Pure matching core: normalizer -> identifiers -> scoring -> ranking.
Stateful operations (ingestion, review, catalog, dashboard) take an
AsyncSession from the caller and never commit it themselves.
"""
