"""Minimal Elasticsearch client wrapper used by the users demo."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import requests
from requests.adapters import BaseAdapter


class ESClientError(RuntimeError):
    """Raised when Elasticsearch answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ESClient:
    """Thin wrapper around the Elasticsearch HTTP API for the users index."""

    def __init__(
        self,
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        api_key: Optional[str] = None,
        verify_tls: bool = True,
        transport: Optional[BaseAdapter] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.verify = bool(verify_tls)

        if api_key:
            self.session.headers["Authorization"] = f"ApiKey {api_key}"
        elif username and password:
            self.session.auth = (username, password)

        if transport is not None:
            self.session.mount("http://", transport)
            self.session.mount("https://", transport)

    def _url(self, path: str) -> str:
        path = path if path.startswith("/") else f"/{path}"
        return f"{self.base_url}{path}"

    @staticmethod
    def _check(response: requests.Response, action: str) -> Dict[str, Any]:
        if response.status_code >= 300:
            raise ESClientError(
                f"{action} failed: {response.status_code} {response.text[:300]}",
                status_code=response.status_code,
            )
        if not response.content:
            return {}
        return response.json()

    def ping(self) -> Dict[str, Any]:
        """Fetch cluster info and report the status code and version."""

        response = self.session.get(self._url("/"), verify=self.verify)
        info = self._check(response, "Ping")
        version = (info.get("version") or {}).get("number", "unknown")
        print(f"Elasticsearch returned with code {response.status_code} and version {version}")
        return info

    def index_exists(self, name: str) -> bool:
        response = self.session.head(self._url(name), verify=self.verify)
        if response.status_code == 404:
            return False
        self._check(response, f"Index check for '{name}'")
        return True

    def create_index(self, name: str, body: Optional[Dict[str, Any]] = None) -> None:
        response = self.session.put(
            self._url(name), data=json.dumps(body or {}), verify=self.verify
        )
        result = self._check(response, f"Create index '{name}'")
        if not result.get("acknowledged"):
            raise ESClientError(
                f"Create index '{name}' was not acknowledged. Check that timeout value is correct.",
                status_code=response.status_code,
            )

    def ensure_index(self, name: str, body: Optional[Dict[str, Any]] = None) -> bool:
        """Create ``name`` when missing; return True if it was created."""

        if self.index_exists(name):
            return False
        self.create_index(name, body)
        return True

    def delete_index(self, name: str) -> None:
        response = self.session.delete(self._url(name), verify=self.verify)
        if response.status_code == 404:
            return
        self._check(response, f"Delete index '{name}'")

    def index_document(
        self, index: str, doc: Dict[str, Any], doc_id: Optional[str] = None
    ) -> Dict[str, Any]:
        payload = json.dumps(doc, ensure_ascii=False).encode("utf-8")
        if doc_id:
            response = self.session.put(
                self._url(f"{index}/_doc/{doc_id}"), data=payload, verify=self.verify
            )
        else:
            response = self.session.post(
                self._url(f"{index}/_doc"), data=payload, verify=self.verify
            )
        return self._check(response, f"Index document into '{index}'")

    def refresh(self, index: str) -> Dict[str, Any]:
        response = self.session.post(self._url(f"{index}/_refresh"), verify=self.verify)
        return self._check(response, f"Refresh '{index}'")

    def flush(self, index: str) -> Dict[str, Any]:
        response = self.session.post(self._url(f"{index}/_flush"), verify=self.verify)
        return self._check(response, f"Flush '{index}'")

    def search(self, index: str, body: Dict[str, Any]) -> Dict[str, Any]:
        response = self.session.post(
            self._url(f"{index}/_search"), data=json.dumps(body), verify=self.verify
        )
        return self._check(response, f"Search '{index}'")

    def delete_by_query(
        self, index: str, query: Dict[str, Any], refresh: bool = True
    ) -> Dict[str, Any]:
        params = {"refresh": "true"} if refresh else None
        response = self.session.post(
            self._url(f"{index}/_delete_by_query"),
            data=json.dumps({"query": query}),
            params=params,
            verify=self.verify,
        )
        return self._check(response, f"Delete by query on '{index}'")

    def close(self) -> None:
        self.session.close()


__all__ = ["ESClient", "ESClientError"]
