"""Catalog schema and sample-data bootstrap helpers."""
