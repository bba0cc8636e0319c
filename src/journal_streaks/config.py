"""Configuración de la herramienta (zona horaria de referencia + hitos)."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from typing import Any

from dateutil import tz

from journal_streaks.streaks import MILESTONES

logger = logging.getLogger(__name__)

TZ_ENV_VAR = "JOURNAL_STREAKS_TZ"


@dataclass(frozen=True)
class StreakConfig:
    """Configuration for day truncation, milestones and exports."""

    timezone: str = "UTC"
    milestones: tuple[int, ...] = MILESTONES
    export_dir: str = ""

    @property
    def tzinfo(self) -> tzinfo:
        """Resolve the reference time zone.

        Raises:
            ValueError: If the zone name is unknown.
        """
        zone = tz.gettz(self.timezone)
        if zone is None:
            raise ValueError(f"Unknown time zone: {self.timezone}")
        return zone


def load_config(path: Path | None = None) -> StreakConfig:
    """Devuelve configuracion del archivo JSON o defaults.

    La variable de entorno ``JOURNAL_STREAKS_TZ`` pisa la zona horaria.
    """
    values: dict[str, Any] = {}
    if path is not None and path.exists():
        values = _read_json_object(path)

    timezone = os.environ.get(TZ_ENV_VAR) or str(values.get("timezone") or "UTC")
    return StreakConfig(
        timezone=timezone,
        milestones=_parse_milestones(values.get("milestones")),
        export_dir=str(values.get("export_dir") or ""),
    )


def _read_json_object(path: Path) -> dict[str, Any]:
    try:
        parsed: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.warning("Config %s is not valid JSON; using defaults", path)
        return {}
    if not isinstance(parsed, dict):
        logger.warning("Config %s must be a JSON object; using defaults", path)
        return {}
    return parsed


def _parse_milestones(raw: Any) -> tuple[int, ...]:
    """Lista de hitos positivos y estrictamente crecientes, o los default."""
    if raw is None:
        return MILESTONES
    if not isinstance(raw, list) or not raw:
        logger.warning("Invalid milestones %r; using defaults", raw)
        return MILESTONES
    if not all(isinstance(m, int) and not isinstance(m, bool) for m in raw):
        logger.warning("Invalid milestones %r; using defaults", raw)
        return MILESTONES
    if raw[0] < 1 or any(b <= a for a, b in zip(raw, raw[1:])):
        logger.warning("Milestones must be positive and ascending: %r", raw)
        return MILESTONES
    return tuple(raw)
