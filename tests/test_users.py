"""Tests for src.search.users covering query bodies and error reporting.

Run with coverage:
    pytest tests/test_users.py --maxfail=1 -v --cov=src.search.users --cov-report=term-missing
"""

from unittest.mock import MagicMock

import requests

from src.search import users
from src.search.client import ESClientError
from src.search.model import User, build_sample_users
from src.search.schema import USERS_MAPPING


def _hits(*sources):
    return {"hits": {"hits": [{"_id": str(i), "_source": src} for i, src in enumerate(sources)]}}


def test_create_index_uses_users_mapping():
    client = MagicMock()
    client.ensure_index.return_value = True
    assert users.create_index_if_not_exists(client, "users_index") is True
    client.ensure_index.assert_called_once_with("users_index", USERS_MAPPING)


def test_insert_users_continues_after_failure(capsys):
    client = MagicMock()
    client.index_document.side_effect = [{}, ESClientError("boom", 500), {}, {}]

    inserted = users.insert_users(client, "users_index", build_sample_users(4))

    assert inserted == 3
    assert client.index_document.call_count == 4
    assert "UserId=2 was not created. Error : boom" in capsys.readouterr().out
    client.refresh.assert_called_once_with("users_index")
    client.flush.assert_called_once_with("users_index")
    doc_ids = [call.kwargs["doc_id"] for call in client.index_document.call_args_list]
    assert doc_ids == ["1", "2", "3", "4"]


def test_convert_search_result_skips_bad_hits(capsys):
    result = _hits({"id": 1, "email": "a@b.c"}, {"id": "not-an-int"}, None)
    converted = users.convert_search_result_to_users(result)

    assert [u.user_id for u in converted] == [1]
    assert capsys.readouterr().out.count("Can't deserialize") == 2
    assert users.convert_search_result_to_users(None) == []


def test_get_all_sends_match_all():
    client = MagicMock()
    client.search.return_value = _hits({"id": 1}, {"id": 2})

    result = users.get_all(client, "users_index")

    assert [u.user_id for u in result] == [1, 2]
    client.search.assert_called_once_with("users_index", {"query": {"match_all": {}}})


def test_get_user_by_id_builds_term_query():
    client = MagicMock()
    client.search.return_value = _hits({"id": 2, "firstname": "FirstName_2"})

    user = users.get_user_by_id(client, "users_index", 2)

    assert user == User(user_id=2, first_name="FirstName_2")
    body = client.search.call_args.args[1]
    assert body == {"query": {"bool": {"must": [{"term": {"id": 2}}]}}}


def test_get_user_by_id_returns_none_when_missing_or_on_error(capsys):
    client = MagicMock()
    client.search.return_value = _hits()
    assert users.get_user_by_id(client, "users_index", 9) is None

    client.search.side_effect = requests.ConnectionError("refused")
    assert users.get_user_by_id(client, "users_index", 9) is None
    assert "Error during execution GetUserByID : refused" in capsys.readouterr().out


def test_get_all_active_users_sorts_newest_first():
    client = MagicMock()
    client.search.return_value = _hits({"id": 3, "isActive": True}, {"id": 1, "isActive": True})

    result = users.get_all_active_users(client, "users_index")

    assert [u.user_id for u in result] == [3, 1]
    body = client.search.call_args.args[1]
    assert body["query"] == {"bool": {"must": [{"term": {"isActive": True}}]}}
    assert body["sort"] == [{"creation_date": {"order": "desc"}}]


def test_delete_user_returns_count_and_reports_errors(capsys):
    client = MagicMock()
    client.delete_by_query.return_value = {"deleted": 1}
    assert users.delete_user(client, "users_index", 2) == 1
    client.delete_by_query.assert_called_once_with(
        "users_index", {"bool": {"must": [{"term": {"id": 2}}]}}
    )

    client.delete_by_query.side_effect = ESClientError("version_conflict", 409)
    assert users.delete_user(client, "users_index", 2) == 0
    assert "Error during execution DeleteUser" in capsys.readouterr().out


def test_insert_users_reports_refresh_failure(capsys):
    client = MagicMock()
    client.refresh.side_effect = requests.ConnectionError("reset by peer")

    assert users.insert_users(client, "users_index", build_sample_users(1)) == 1
    assert "[warn] refresh of users_index failed: reset by peer" in capsys.readouterr().out
    assert not client.flush.called
