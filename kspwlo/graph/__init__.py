"""Graph model and ingestion helpers.

This package provides the strict multi-directed graph type `StrictMultiDiGraph`
and readers for the `.gr` edge-list, YAML, and node-link formats (`io`).
"""
