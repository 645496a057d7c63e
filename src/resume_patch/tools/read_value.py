from __future__ import annotations

from typing import Any, Optional

from resume_patch.schema.validation import describe_json_type
from resume_patch.tools.json_pointer import parse_array_index, parse_json_pointer


class ReadValue:
    _DEFAULTS = {
        "max_string_length": 400,
        "max_depth": 6,
        "max_array_items": 50,
    }

    @classmethod
    def read(cls, root: Any, input_data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        if input_data is None:
            input_data = {}

        path = input_data.get("path", "")
        if not isinstance(path, str):
            return {"found": False, "error": "Missing input.path (string)", "path": ""}

        opts = cls._read_options(input_data)

        try:
            tokens = parse_json_pointer(path)
        except ValueError as e:
            return {"found": False, "error": str(e), "path": path}

        cur = root
        for i, tok in enumerate(tokens):
            if isinstance(cur, list):
                idx = parse_array_index(tok)
                if idx is None:
                    return {
                        "found": False,
                        "error": f"Invalid array index token '{tok}' at token index {i}",
                        "path": path,
                    }
                if idx >= len(cur):
                    return {
                        "found": False,
                        "error": f"Array index out of range: {idx} (length {len(cur)})",
                        "path": path,
                    }
                cur = cur[idx]
            elif isinstance(cur, dict):
                if tok not in cur:
                    return {
                        "found": False,
                        "error": f"Key not found: '{tok}'",
                        "path": path,
                        "availableKeys": sorted(cur.keys())[:50],
                    }
                cur = cur[tok]
            else:
                return {
                    "found": False,
                    "error": f"Cannot traverse '{tok}': encountered {describe_json_type(cur)} at token index {i}",
                    "path": path,
                }

        truncated = [False]
        value = cls._sanitize(cur, opts, 0, truncated)
        return {
            "found": True,
            "path": path,
            "valueType": describe_json_type(cur),
            "value": value,
            "valueTruncated": truncated[0],
        }

    @classmethod
    def _read_options(cls, input_data: dict[str, Any]) -> dict[str, int]:
        opts = dict(cls._DEFAULTS)
        for key in opts:
            v = input_data.get(key)
            if isinstance(v, int) and not isinstance(v, bool):
                opts[key] = max(0, v)
        return opts

    @classmethod
    def _sanitize(cls, value: Any, opts: dict[str, int], depth: int, truncated: list[bool]) -> Any:
        if isinstance(value, str):
            limit = opts["max_string_length"]
            if len(value) > limit:
                truncated[0] = True
                return value[:limit] + "…"
            return value
        if isinstance(value, (list, dict)) and depth >= opts["max_depth"]:
            truncated[0] = True
            return f"[{describe_json_type(value)} omitted at max depth]"
        if isinstance(value, list):
            take = value[: opts["max_array_items"]]
            if len(take) < len(value):
                truncated[0] = True
            return [cls._sanitize(v, opts, depth + 1, truncated) for v in take]
        if isinstance(value, dict):
            return {k: cls._sanitize(v, opts, depth + 1, truncated) for k, v in value.items()}
        return value


def read_value(document: Any, input_data: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """
    Read the value at ``input_data["path"]`` in a JSON document.

    Args:
        document: The root JSON document.
        input_data: Dict with ``path`` and optional ``max_string_length``,
                    ``max_depth`` and ``max_array_items``.

    Returns:
        ``{"found": True, "path", "valueType", "value", "valueTruncated"}``
        or ``{"found": False, "error", "path"}``.
    """
    return ReadValue.read(document, input_data)
