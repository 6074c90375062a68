"""CRUD and query operations against the users index."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import requests

from .client import ESClient, ESClientError
from .model import User
from .queries import bool_query, field_sort, match_all, search_body, term
from .schema import USERS_MAPPING

# errors reported and skipped by the demo operations
CLIENT_ERRORS = (ESClientError, requests.RequestException)


def create_index_if_not_exists(
    client: ESClient, index: str, mapping: Optional[Dict[str, Any]] = None
) -> bool:
    """Create ``index`` with the users mapping unless it already exists."""

    return client.ensure_index(index, USERS_MAPPING if mapping is None else mapping)


def insert_users(client: ESClient, index: str, users: Iterable[User]) -> int:
    """Index each user; failures are reported and skipped."""

    inserted = 0
    for user in users:
        try:
            client.index_document(index, user.to_dict(), doc_id=str(user.user_id))
        except CLIENT_ERRORS as exc:
            print(f"UserId={user.user_id} was not created. Error : {exc}")
            continue
        inserted += 1

    # documents are only searchable after a refresh; flush persists them
    try:
        client.refresh(index)
        client.flush(index)
    except CLIENT_ERRORS as exc:
        print(f"[warn] refresh of {index} failed: {exc}")
    return inserted


def convert_search_result_to_users(search_result: Optional[Dict[str, Any]]) -> List[User]:
    result: List[User] = []
    if not search_result:
        return result
    for hit in (search_result.get("hits") or {}).get("hits") or []:
        try:
            result.append(User.from_dict(hit.get("_source")))
        except (TypeError, ValueError) as exc:
            print(f"[warn] Can't deserialize 'user' object {hit.get('_id')}: {exc}")
    return result


def _search_users(client: ESClient, index: str, body: Dict[str, Any], op_name: str) -> List[User]:
    try:
        search_result = client.search(index, body)
    except CLIENT_ERRORS as exc:
        print(f"Error during execution {op_name} : {exc}")
        return []
    return convert_search_result_to_users(search_result)


def get_all(client: ESClient, index: str) -> List[User]:
    return _search_users(client, index, search_body(match_all()), "GetAll")


def get_user_by_id(client: ESClient, index: str, user_id: int) -> Optional[User]:
    body = search_body(bool_query(must=[term("id", user_id)]))
    users = _search_users(client, index, body, "GetUserByID")
    return users[0] if users else None


def get_all_active_users(client: ESClient, index: str) -> List[User]:
    """Active users, newest first."""

    body = search_body(
        bool_query(must=[term("isActive", True)]),
        sort=[field_sort("creation_date", "desc")],
    )
    return _search_users(client, index, body, "GetAllActiveUsers")


def delete_user(client: ESClient, index: str, user_id: int) -> int:
    """Delete every document with ``id == user_id``; return the deleted count."""

    try:
        result = client.delete_by_query(index, bool_query(must=[term("id", user_id)]))
    except CLIENT_ERRORS as exc:
        print(f"Error during execution DeleteUser : {exc}")
        return 0
    return int(result.get("deleted", 0))


__all__ = [
    "CLIENT_ERRORS",
    "create_index_if_not_exists",
    "insert_users",
    "convert_search_result_to_users",
    "get_all",
    "get_user_by_id",
    "get_all_active_users",
    "delete_user",
]
