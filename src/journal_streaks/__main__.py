"""Punto de entrada ``python -m journal_streaks``."""

from __future__ import annotations

from journal_streaks.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
