"""JSON rendering of documents read from the store"""

import json
from datetime import date, datetime
from typing import Any


def serialize_result(obj):
    """Helper to serialize datetime, ObjectId and other non-JSON types"""
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    return str(obj)


def to_json_text(payload: Any) -> str:
    """Pretty JSON used for tool and resource text payloads"""
    return json.dumps(payload, indent=2, default=serialize_result, ensure_ascii=False)
