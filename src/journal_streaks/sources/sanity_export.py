"""Lectura de exportaciones del dataset de Sanity (NDJSON o JSON)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from journal_streaks.days import UTC, parse_timestamp
from journal_streaks.model import MOODS, JournalEntry
from journal_streaks.sources.base import EntrySource, SourcePaths

logger = logging.getLogger(__name__)

DOCUMENT_TYPE = "journalEntry"
EXPORT_PATTERNS = ("*.ndjson", "*.json")


@dataclass(frozen=True)
class SanityExportPaths(SourcePaths):
    """Paths for document-store exports."""

    # root: folder containing *.ndjson / *.json exports


class SanityExportSource(EntrySource):
    """Journal entries from a Sanity dataset export."""

    def newest_export(self) -> Path:
        """Return newest export file by mtime."""
        files = sorted(
            (p for pattern in EXPORT_PATTERNS for p in self._paths.root.glob(pattern)),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        if not files:
            raise FileNotFoundError(f"No *.ndjson or *.json in {self._paths.root}")
        return files[0]

    def load_entries(
        self, path: Path, user_id: str | None = None
    ) -> list[JournalEntry]:
        """Parse an export into typed journal entries.

        Args:
            path: Path to the NDJSON or JSON export.
            user_id: Keep only this user's entries when given.

        Returns:
            Entries sorted newest first.

        Raises:
            ValueError: If the export shape or a timestamp is invalid.
        """
        text = path.read_text(encoding="utf-8")
        documents = _parse_documents(text)

        out: list[JournalEntry] = []
        skipped = 0
        for doc in documents:
            if not _is_journal_entry(doc):
                continue
            if user_id is not None and doc.get("userId") != user_id:
                continue
            entry = _document_to_entry(doc)
            if entry is None:
                skipped += 1
                continue
            out.append(entry)

        if skipped:
            logger.warning("Skipped %d journal entries without id or date", skipped)
        logger.info("Loaded %d journal entries from %s", len(out), path)
        out.sort(key=lambda e: _sort_key(e.created_at), reverse=True)
        return out


def _parse_documents(text: str) -> list[Any]:
    """Devuelve los documentos de un array JSON o de un NDJSON."""
    stripped = text.strip()
    if not stripped:
        return []
    start = stripped.find("[")
    if start >= 0 and not stripped.startswith("{"):
        raw = json.loads(stripped[start:])
        if not isinstance(raw, list):
            raise ValueError("Export JSON must be a list")
        return raw
    try:
        return [json.loads(line) for line in stripped.splitlines() if line.strip()]
    except json.JSONDecodeError as exc:
        raise ValueError(f"Export is neither a JSON array nor NDJSON: {exc}") from exc


def _sort_key(moment: datetime) -> datetime:
    """Fechas naive se ordenan como UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def _is_journal_entry(doc: Any) -> bool:
    return isinstance(doc, dict) and doc.get("_type") == DOCUMENT_TYPE


def _reference_id(value: Any) -> str | None:
    """Extrae el ``_ref`` de una referencia (categoría asignada por IA)."""
    if isinstance(value, dict) and value.get("_ref"):
        return str(value["_ref"])
    return None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def _parse_mood(value: Any) -> str | None:
    """Valor de ánimo conocido; otros valores se descartan."""
    mood = _optional_text(value)
    if mood is not None and mood not in MOODS:
        logger.warning("Unknown mood %r ignored", mood)
        return None
    return mood


def _document_to_entry(doc: dict[str, Any]) -> JournalEntry | None:
    """Convierte un documento en JournalEntry; None si falta id o fecha."""
    entry_id = _optional_text(doc.get("_id"))
    created = doc.get("createdAt") or doc.get("_createdAt")
    if entry_id is None or created is None:
        return None
    return JournalEntry(
        entry_id=entry_id,
        created_at=parse_timestamp(created),
        user_id=_optional_text(doc.get("userId")),
        title=_optional_text(doc.get("title")),
        mood=_parse_mood(doc.get("mood")),
        category_id=_reference_id(doc.get("aiGeneratedCategory")),
    )
