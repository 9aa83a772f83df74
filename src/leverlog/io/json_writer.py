# src/leverlog/io/json_writer.py
import json  # standard JSON serialization module
import os
import tempfile
from typing import Any  # for flexible type hints (any data structure)

def write_json_atomic(path: str, data: Any):  # write data as formatted JSON, replacing path in one step
    folder = os.path.dirname(os.path.abspath(path))
    os.makedirs(folder, exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp-", suffix=".json", dir=folder)  # same folder so os.replace stays atomic
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)  # keep Unicode and pretty format
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)  # never leave half-written temp files behind
        raise
