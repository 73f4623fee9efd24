"""A JSON file holding a list of records, one per aggregate."""

from __future__ import annotations

import json
from pathlib import Path


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(records, indent=2) + "\n", encoding="utf-8"
        )

    @staticmethod
    def next_id(records: list[dict]) -> int:
        """One more than the largest integer ID in use."""
        ids = [int(r["id"]) for r in records if str(r.get("id", "")).isdigit()]
        return max(ids) + 1 if ids else 1

    @staticmethod
    def index_of(records: list[dict], record_id: int | str) -> int | None:
        for i, raw in enumerate(records):
            if str(raw.get("id")) == str(record_id):
                return i
        return None

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
