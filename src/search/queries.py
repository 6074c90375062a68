"""Plain-dict builders for the Elasticsearch query DSL used by the demo."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

Query = Dict[str, Any]


def match_all() -> Query:
    return {"match_all": {}}


def term(field: str, value: Any) -> Query:
    return {"term": {field: value}}


def bool_query(
    must: Optional[Iterable[Query]] = None,
    filter: Optional[Iterable[Query]] = None,
    must_not: Optional[Iterable[Query]] = None,
) -> Query:
    """Combine clauses into a bool query; empty clause lists are omitted."""

    clauses: Dict[str, List[Query]] = {}
    for name, items in (("must", must), ("filter", filter), ("must_not", must_not)):
        if items:
            clauses[name] = list(items)
    return {"bool": clauses}


def field_sort(field: str, order: str = "asc") -> Dict[str, Any]:
    if order not in ("asc", "desc"):
        raise ValueError(f"sort order must be 'asc' or 'desc', got {order!r}")
    return {field: {"order": order}}


def search_body(
    query: Query,
    sort: Optional[Iterable[Dict[str, Any]]] = None,
    size: Optional[int] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"query": query}
    if sort:
        body["sort"] = list(sort)
    if size is not None:
        body["size"] = size
    return body


__all__ = ["Query", "match_all", "term", "bool_query", "field_sort", "search_body"]
