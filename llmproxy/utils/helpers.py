import json
from typing import Any


def try_parse_json(raw: str) -> dict[str, Any] | None:
    try:
        val = json.loads(raw)
    except Exception:
        return None
    return val if isinstance(val, dict) else None


def compact_json_dumps(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def env_flag(raw: str | None) -> bool:
    return (raw or "").strip().lower() in ("1", "true", "yes", "on")


def blank_to_none(raw: str | None) -> str | None:
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None
