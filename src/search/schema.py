"""Index name and explicit mapping for the users index."""

from __future__ import annotations

from typing import Any, Dict

USERS_INDEX = "users_index"

USERS_MAPPING: Dict[str, Any] = {
    "settings": {"number_of_shards": 1, "number_of_replicas": 0},
    "mappings": {
        "dynamic": True,
        "properties": {
            "id": {"type": "long"},
            "email": {"type": "keyword"},
            "firstname": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
            "lastname": {"type": "text", "fields": {"keyword": {"type": "keyword"}}},
            "age": {"type": "integer"},
            "isActive": {"type": "boolean"},
            "balance": {"type": "long"},
            "phone": {"type": "keyword"},
            "user_type": {"type": "keyword"},
            "creation_date": {"type": "date"},
        },
    },
}

__all__ = ["USERS_INDEX", "USERS_MAPPING"]
