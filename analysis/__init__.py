"""Workload analysis and reporting."""
