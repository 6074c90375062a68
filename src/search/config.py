"""Configuration helpers for the Elasticsearch users demo."""

from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .schema import USERS_INDEX

DEFAULT_ELASTIC_HOST = "localhost:9200"
DEFAULT_USER_COUNT = 4
DEV_ENVIRONMENT = "DEV"
DEFAULT_CONFIG_FILENAME = "local_config.json"
CONFIG_SECTION = "elasticsearch"

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def _default_config_path() -> Path:
    return Path(__file__).resolve().parents[2] / DEFAULT_CONFIG_FILENAME


def load_dev_config(path: Optional[str | Path] = None) -> Dict[str, Any]:
    """Return the ``elasticsearch`` section of the local (gitignored) config file.

    A missing file yields {}. Unreadable JSON, or a file or section that is
    not an object, is reported and also yields {}.
    """

    config_path = Path(path or _default_config_path()).expanduser()
    if not config_path.exists():
        return {}
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as exc:
        print(f"[warn] could not read {config_path}: {exc}")
        return {}
    section = data.get(CONFIG_SECTION, {}) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        print(f"[warn] {config_path}: '{CONFIG_SECTION}' must be a JSON object; ignoring it")
        return {}
    return section


def parse_bool(value: Any) -> Optional[bool]:
    """Coerce config/env flags; None for unset, ValueError for anything unrecognised."""

    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"expected a boolean, got {value!r}")


def positive_int(value: str) -> int:
    """argparse ``type`` for counts that must be at least 1."""

    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


@dataclass(frozen=True)
class DemoSettings:
    """Resolved runtime settings for the demo run."""

    es_host: str
    username: Optional[str]
    password: Optional[str]
    api_key: Optional[str]
    verify_tls: bool
    index: str
    user_count: int
    verbose_http: bool
    reset: bool


def normalize_host(host: str) -> str:
    """Prefix ``http://`` to bare ``host:port`` values."""

    host = host.strip()
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip("/")


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the demo entry point."""

    parser = argparse.ArgumentParser(
        description="Create a users index in Elasticsearch and run sample queries against it.",
    )
    parser.add_argument("--es-host", default=None, help="Elasticsearch host, e.g. localhost:9200")
    parser.add_argument("--username", default=None)
    parser.add_argument("--password", default=None)
    parser.add_argument("--api-key", default=None)
    parser.add_argument("--verify-tls", action="store_true", default=None)
    parser.add_argument("--index", default=None)
    parser.add_argument(
        "--users", type=positive_int, default=None, help="number of sample users to insert"
    )
    parser.add_argument(
        "--quiet-http",
        action="store_true",
        help="log one line per HTTP call instead of the full request block",
    )
    parser.add_argument("--reset", action="store_true", help="drop the index before the run")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def _base_values(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Values from the local config file in DEV, otherwise from the environment."""

    if environ.get("ENVIRONMENT") == DEV_ENVIRONMENT:
        section = load_dev_config(environ.get("LOCAL_CONFIG_FILE"))
        keys = ("host", "username", "password", "api_key", "verify_tls", "index")
        return {key: section.get(key) for key in keys}
    return {
        "host": environ.get("ELASTIC_HOST"),
        "username": environ.get("ELASTIC_USERNAME"),
        "password": environ.get("ELASTIC_PASSWORD"),
        "api_key": environ.get("ELASTIC_API_KEY"),
        "verify_tls": environ.get("ELASTIC_VERIFY_TLS"),
        "index": environ.get("ELASTIC_INDEX"),
    }


def resolve_settings(
    args: Optional[argparse.Namespace] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> DemoSettings:
    """Merge defaults, config file or environment, and CLI flags (highest wins).

    Raises ValueError when ``verify_tls`` from the config file or environment
    is not a recognisable boolean.
    """

    args = args or parse_args([])
    base = _base_values(os.environ if environ is None else environ)

    def pick(cli_value: Any, key: str, default: Any = None) -> Any:
        if cli_value is not None:
            return cli_value
        value = base.get(key)
        return default if value in (None, "") else value

    try:
        verify_tls = parse_bool(pick(args.verify_tls, "verify_tls", False))
    except ValueError as exc:
        raise ValueError(f"verify_tls: {exc}") from None

    return DemoSettings(
        es_host=normalize_host(pick(args.es_host, "host", DEFAULT_ELASTIC_HOST)),
        username=pick(args.username, "username"),
        password=pick(args.password, "password"),
        api_key=pick(args.api_key, "api_key"),
        verify_tls=bool(verify_tls),
        index=pick(args.index, "index", USERS_INDEX),
        user_count=args.users if args.users is not None else DEFAULT_USER_COUNT,
        verbose_http=not args.quiet_http,
        reset=bool(args.reset),
    )


__all__ = [
    "DEFAULT_ELASTIC_HOST",
    "DEFAULT_USER_COUNT",
    "DemoSettings",
    "load_dev_config",
    "parse_bool",
    "positive_int",
    "normalize_host",
    "build_arg_parser",
    "parse_args",
    "resolve_settings",
]
