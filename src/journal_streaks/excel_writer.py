"""Generación de Excel formateado con el calendario de rachas."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from journal_streaks.model import StreakResult
from journal_streaks.streaks import (
    MILESTONES,
    next_milestone,
    streak_status_message,
)

_DIA_SEMANA: tuple[str, ...] = ("lun", "mar", "mie", "jue", "vie", "sab", "dom")

_HEADER_MAP: dict[str, str] = {
    "weekday": "Día",
    "date": "Fecha",
    "entries": "Entradas",
    "mood": "Ánimo",
    "run_length": "Racha",
    "in_current_streak": "Racha\nactual",
}

_STREAK_FILL = PatternFill(fill_type="solid", start_color="FFE699", end_color="FFE699")
_THIN = Side(style="thin")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)

_CALENDAR_WIDTHS: dict[str, int] = {
    "Día": 6,
    "Fecha": 12,
    "Entradas": 10,
    "Ánimo": 12,
    "Racha": 8,
    "Racha\nactual": 8,
}


@dataclass(frozen=True)
class ExcelLayout:
    """Layout/formatting configuration for the streak report."""

    sheet_name: str = "Calendario"
    summary_sheet_name: str = "Resumen"


def _weekday_label(day: object) -> str:
    """Convierte una fecha a etiqueta de 3 letras (lun-dom)."""
    if isinstance(day, date):
        return _DIA_SEMANA[day.weekday()]
    return ""


def _prepare_calendar(calendar: pd.DataFrame) -> pd.DataFrame:
    """Añade columna Día, marca la racha actual y renombra cabeceras."""
    export_df = calendar.copy()
    if "date" in export_df.columns:
        export_df.insert(0, "weekday", export_df["date"].map(_weekday_label))
    if "in_current_streak" in export_df.columns:
        export_df["in_current_streak"] = export_df["in_current_streak"].map(
            lambda flag: "sí" if flag else ""
        )
    return export_df.rename(columns=_HEADER_MAP)


def _summary_frame(
    result: StreakResult, today: date, milestones: tuple[int, ...]
) -> pd.DataFrame:
    projection = next_milestone(result.current_streak, milestones)
    rows = [
        ("Racha actual", result.current_streak),
        ("Racha más larga", result.longest_streak),
        ("Última entrada", result.last_entry_date),
        ("Próximo hito", projection.milestone),
        ("Días para el hito", projection.days_until),
        ("Estado", streak_status_message(result, today=today)),
    ]
    return pd.DataFrame(rows, columns=["Métrica", "Valor"])


def write_streak_xlsx(
    calendar: pd.DataFrame,
    result: StreakResult,
    out_path: Path,
    layout: ExcelLayout,
    *,
    today: date,
    milestones: tuple[int, ...] = MILESTONES,
) -> None:
    """Write a formatted Excel report with the streak calendar and summary.

    Args:
        calendar: Output of ``history.streak_calendar``.
        result: Streak statistics shown in the summary sheet.
        out_path: Output path for the XLSX file.
        layout: Excel layout parameters.
        today: Reference day for the status message.
        milestones: Milestones used for the projection.
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    export_df = _prepare_calendar(calendar)
    summary_df = _summary_frame(result, today, milestones)

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        export_df.to_excel(writer, index=False, sheet_name=layout.sheet_name)
        summary_df.to_excel(writer, index=False, sheet_name=layout.summary_sheet_name)
        _format_sheet(writer.book[layout.sheet_name])
        _format_summary_sheet(writer.book[layout.summary_sheet_name])


def _style_cells(ws: Any, *, center_body: bool = True) -> dict[str, int]:
    """Bordes en todas las celdas, cabecera en negrita.

    Devuelve la posición (1-based) de cada cabecera.
    """
    headers: dict[str, int] = {}
    for row in ws.iter_rows():
        for cell in row:
            cell.border = _BORDER
            if cell.row == 1:
                cell.font = Font(bold=True)
                cell.alignment = _CENTER
                headers[str(cell.value)] = cell.column
            elif center_body:
                cell.alignment = _CENTER
    return headers


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths, date format and streak highlight.

    Args:
        ws: openpyxl worksheet.
    """
    headers = _style_cells(ws)
    for header, width in _CALENDAR_WIDTHS.items():
        if header in headers:
            letter = ws.cell(row=1, column=headers[header]).column_letter
            ws.column_dimensions[letter].width = width

    fecha_idx = headers.get("Fecha")
    streak_idx = headers.get("Racha\nactual")
    for row in ws.iter_rows(min_row=2):
        if fecha_idx is not None:
            row[fecha_idx - 1].number_format = "dd/mm/yyyy"
        # filas de la racha actual
        if streak_idx is not None and row[streak_idx - 1].value:
            for cell in row:
                cell.fill = _STREAK_FILL


def _format_summary_sheet(ws: Any) -> None:
    _style_cells(ws, center_body=False)
    ws.column_dimensions["A"].width = 20
    ws.column_dimensions["B"].width = 48
