"""Elasticsearch users demo: client, queries, and CRUD operations."""

from .runner import main, run_demo

__all__ = ["main", "run_demo"]
