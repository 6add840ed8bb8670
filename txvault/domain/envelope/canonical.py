import json
from typing import Any

from .errors import NotSerializable


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Produce a canonical JSON byte string for binding as associated data.

    Implementation Rules:
    1. Keys sorted lexicographically.
    2. No whitespace (separators: (',', ':')).
    3. UTF-8 encoded.
    """
    canonical_str = json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return canonical_str.encode("utf-8")


def _check_round_trippable(obj: Any) -> None:
    """Reject containers json.dumps would silently reshape.

    Non-str dict keys are stringified (and can collide with real string
    keys) and tuples come back as lists.
    """
    if isinstance(obj, dict):
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"dict key {key!r} is not a string")
            _check_round_trippable(value)
    elif isinstance(obj, tuple):
        raise TypeError("tuple would come back as a list")
    elif isinstance(obj, list):
        for item in obj:
            _check_round_trippable(item)


def serialize_payload(payload: Any) -> bytes:
    """Serialize a caller payload to compact UTF-8 JSON.

    Only payloads that deserialize back to an equal value are accepted:
    dict keys must be strings and sequences must be lists. NaN/Infinity,
    circular references and non-JSON types are rejected.
    """
    try:
        _check_round_trippable(payload)
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError):
        raise NotSerializable("payload is not JSON-serializable", field="payload") from None
    return text.encode("utf-8")


def deserialize_payload(data: bytes) -> Any:
    """Inverse of serialize_payload.

    Raises ValueError on malformed input and RecursionError on
    pathologically deep nesting.
    """
    return json.loads(data.decode("utf-8"))
