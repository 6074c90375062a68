"""Entry point wiring configuration, the logging transport, and the users demo."""

from __future__ import annotations

from typing import List, Optional

import requests

from src.httplog.transport import LoggingTransport, default_log_func, verbose_log_func

from .client import ESClient, ESClientError
from .config import DemoSettings, build_arg_parser, parse_args, resolve_settings
from .model import User, build_sample_users
from .users import (
    create_index_if_not_exists,
    delete_user,
    get_all,
    get_all_active_users,
    get_user_by_id,
    insert_users,
)

LOOKUP_USER_ID = 2


def _build_client(settings: DemoSettings) -> ESClient:
    transport = LoggingTransport(
        log_func=verbose_log_func if settings.verbose_http else default_log_func,
    )
    return ESClient(
        base_url=settings.es_host,
        username=settings.username,
        password=settings.password,
        api_key=settings.api_key,
        verify_tls=settings.verify_tls,
        transport=transport,
    )


def _print_user(user: Optional[User]) -> None:
    if user is None:
        print(" User Result \n<not found>")
    else:
        print(" User Result \n" + user.to_string())


def run_demo(client: ESClient, settings: DemoSettings) -> None:
    """Run the fixed create/insert/query/delete sequence."""

    index = settings.index

    if settings.reset:
        try:
            client.delete_index(index)
        except (ESClientError, requests.RequestException) as exc:
            print(f"[error] could not drop index {index}: {exc}")

    try:
        create_index_if_not_exists(client, index)
    except (ESClientError, requests.RequestException) as exc:
        print(f"[error] could not create index {index}: {exc}")

    print(" ---- InsertUsers --------")
    inserted = insert_users(client, index, build_sample_users(settings.user_count))
    print(f" Inserted {inserted}/{settings.user_count} users")

    print(" ---- GetAll --------")
    users = get_all(client, index)
    if users:
        print(" First User from Result \n" + users[0].to_string())
    else:
        print(" No users found")

    print(" ---- GetUserById --------")
    _print_user(get_user_by_id(client, index, LOOKUP_USER_ID))

    print(" ---- GetAllActiveUsers --------")
    active_users = get_all_active_users(client, index)
    if active_users:
        print(f" Found {len(active_users)} active users")
        _print_user(active_users[0])

    print(" ---- DeleteUser --------")
    deleted = delete_user(client, index, LOOKUP_USER_ID)
    print(f" Deleted {deleted} document(s) for UserId={LOOKUP_USER_ID}")
    _print_user(get_user_by_id(client, index, LOOKUP_USER_ID))


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point; exits with status 1 when the cluster is unreachable."""

    args = parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ValueError as exc:
        build_arg_parser().error(str(exc))
    client = _build_client(settings)
    try:
        try:
            client.ping()
        except (ESClientError, requests.RequestException) as exc:
            print("Error : ", exc)
            raise SystemExit(1)
        run_demo(client, settings)
    finally:
        client.close()


__all__ = ["main", "run_demo"]
