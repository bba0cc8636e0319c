"""Clases base para fuentes de entradas de diario."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from journal_streaks.model import JournalEntry


@dataclass(frozen=True)
class SourcePaths:
    """Container for source directories."""

    root: Path


class EntrySource(ABC):
    """Abstract journal entry source."""

    def __init__(self, paths: SourcePaths) -> None:
        """Create an entry source.

        Args:
            paths: Source paths configuration.
        """
        self._paths = paths

    def validate(self) -> None:
        """Validate that the source directory exists.

        Raises:
            FileNotFoundError: If the root folder is missing.
        """
        if not self._paths.root.exists():
            raise FileNotFoundError(str(self._paths.root))

    @abstractmethod
    def load_entries(
        self, path: Path, user_id: str | None = None
    ) -> list[JournalEntry]:
        """Load one user's entries from ``path``, newest first."""
