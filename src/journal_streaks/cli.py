"""CLI para calcular rachas de escritura desde una exportación del diario."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from journal_streaks.config import load_config
from journal_streaks.days import current_day, to_day
from journal_streaks.excel_writer import ExcelLayout, write_streak_xlsx
from journal_streaks.history import entries_between, recent_window, streak_calendar
from journal_streaks.sources.sanity_export import (
    SanityExportPaths,
    SanityExportSource,
)
from journal_streaks.streaks import (
    calculate_streaks,
    next_milestone,
    streak_status_message,
)

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Rachas de escritura del diario (racha actual, mas larga, hitos)."
    )
    parser.add_argument(
        "--export-dir",
        default=None,
        help=(
            "Directorio con exportaciones "
            "(default: export_dir de la configuracion o ~/diario/exports)."
        ),
    )
    parser.add_argument(
        "--export-file",
        default=None,
        help="Exportacion puntual (default: la mas reciente de --export-dir).",
    )
    parser.add_argument("--user", default=None, help="userId del dueño del diario.")
    parser.add_argument(
        "--today",
        default=None,
        help="Dia de referencia YYYY-MM-DD (default: hoy en la zona configurada).",
    )
    parser.add_argument("--tz", default=None, help="Zona horaria de referencia.")
    parser.add_argument("--config", default=None, help="Archivo JSON de configuracion.")
    parser.add_argument(
        "--days",
        type=int,
        default=365,
        help="Dias hacia atras incluidos en el calendario Excel.",
    )
    parser.add_argument(
        "--json", action="store_true", help="Imprime el resultado como JSON."
    )
    parser.add_argument(
        "--xlsx", action="store_true", help="Genera el calendario en Excel."
    )
    parser.add_argument("--out-dir", default=None, help="Directorio de salida Excel.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args()


def main() -> int:
    """Run the streaks CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args()
    logging.basicConfig(
        level=logging.INFO if ns.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(Path(ns.config).expanduser() if ns.config else None)
    if ns.tz:
        config = replace(config, timezone=ns.tz)
    tzinfo = config.tzinfo

    export_root = Path(
        ns.export_dir or config.export_dir or Path.home() / "diario" / "exports"
    )
    source = SanityExportSource(
        SanityExportPaths(root=export_root.expanduser().resolve())
    )
    if ns.export_file:
        export_file = Path(ns.export_file).expanduser()
    else:
        source.validate()
        export_file = source.newest_export()

    entries = source.load_entries(export_file, user_id=ns.user)
    today = to_day(ns.today) if ns.today else current_day(tzinfo)
    logger.info("Reference day %s", today.isoformat())

    result = calculate_streaks(entries, today=today, tzinfo=tzinfo)
    projection = next_milestone(result.current_streak, config.milestones)
    message = streak_status_message(result, today=today)

    print(f"OK: Export file: {export_file}")
    if ns.json:
        payload = {
            **result.as_dict(),
            "nextMilestone": projection.milestone,
            "daysUntil": projection.days_until,
            "message": message,
        }
        print(json.dumps(payload, ensure_ascii=False))
    else:
        last = result.last_entry_date.isoformat() if result.last_entry_date else "-"
        print(f"OK: Entries: {len(entries)}")
        print(f"OK: Current streak: {result.current_streak}")
        print(f"OK: Longest streak: {result.longest_streak}")
        print(f"OK: Last entry: {last}")
        print(
            f"OK: Next milestone: {projection.milestone} "
            f"({projection.days_until} days to go)"
        )
        print(message)

    if ns.xlsx:
        start, end = recent_window(today, ns.days)
        window = entries_between(entries, start, end, tzinfo)
        calendar = streak_calendar(window, result, today=today, tzinfo=tzinfo)
        out_dir = Path(ns.out_dir or Path.cwd() / "salidas").expanduser()
        ts = datetime.now(tz=tzinfo).strftime("%Y-%m-%d_%H-%M-%S")
        out_path = out_dir / f"rachas_diario_{ts}.xlsx"
        write_streak_xlsx(
            calendar,
            result,
            out_path,
            ExcelLayout(),
            today=today,
            milestones=config.milestones,
        )
        print(f"OK: Output: {out_path}")
    return 0
