"""Catalog Match: supplier offer reconciliation against a product catalog."""
