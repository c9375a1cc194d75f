from __future__ import annotations
import json
from pathlib import Path
from typing import List

from jsonschema import Draft202012Validator

SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "lectionary.schema.json"

def load_schema(path: Path = SCHEMA_PATH) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))

def schema_errors(doc: dict, schema: dict | None = None) -> List[str]:
    """One '<path>: <message>' line per schema violation."""
    v = Draft202012Validator(schema or load_schema())
    out = []
    for err in sorted(v.iter_errors(doc), key=lambda e: list(map(str, e.path))):
        loc = "/".join(map(str, err.path)) or "(root)"
        out.append(f"{loc}: {err.message}")
    return out

def validate_file(path: Path) -> int:
    if not path.exists() or path.stat().st_size == 0:
        print(f"[error] {path} missing or empty")
        return 1
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        print(f"[invalid] {path}: JSON decode error at line {e.lineno} col {e.colno}: {e.msg}")
        return 1
    errors = schema_errors(data)
    for e in errors:
        print(f"[invalid] {path} {e}")
    if errors:
        return 1
    print(f"[ok] {path} matches schema")
    return 0
