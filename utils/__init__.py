"""Logging, loading, validation and data generation helpers."""
