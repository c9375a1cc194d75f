from __future__ import annotations
import json, os, sys, tempfile
from pathlib import Path
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from . import config

# ===== Logging =====
def log(*a):
    if config.VERBOSE:
        print("[info]", *a, flush=True)

def warn(*a):
    print("[warn]", *a, file=sys.stderr, flush=True)

# ---------- hardened HTTP session ----------
_retry = Retry(total=4, backoff_factor=0.5,
               status_forcelist=(429, 500, 502, 503, 504),
               allowed_methods=("GET",), raise_on_status=False)

SESSION = requests.Session()
SESSION.mount("https://", HTTPAdapter(max_retries=_retry))
SESSION.mount("http://", HTTPAdapter(max_retries=_retry))

def is_url(source: str) -> bool:
    return str(source).lower().startswith(("http://", "https://"))

def fetch_json(url: str, timeout: float | None = None) -> Any:
    r = SESSION.get(url, headers=config.HEADERS, timeout=timeout or config.HTTP_TIMEOUT)
    r.raise_for_status()
    return r.json()

def load_json(path: str | Path) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))

def load_source(source: str | Path) -> Any:
    """Load collaborator JSON from a local path or an http(s) URL."""
    if is_url(str(source)):
        log("GET", source)
        return fetch_json(str(source))
    return load_json(source)

def atomic_write_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=path.name, dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(obj, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp, path)
    finally:
        if os.path.exists(tmp):
            os.remove(tmp)
