"""KPI export sinks: CSV, XLSX, PDF and JSON.

Serializers return the document (str or bytes) so the dashboard can offer
it as a download; ``write_export`` is the only function touching disk.
"""

import io
import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from rich.console import Console

from config.settings import EXPORTS_DIR
from phase2_analytics.schema import ExtendedHeadcount, FilterOptions, KPIData

console = Console()

KPI_COLUMNS = {
    "id": "Identifiant",
    "name": "Indicateur",
    "value": "Valeur",
    "unit": "Unité",
    "trend": "Tendance (%)",
    "comparison": "Comparaison",
    "category": "Statut",
    "insight": "Analyse",
}

CATEGORY_COLORS = {
    "positive": (0.09, 0.55, 0.27),
    "negative": (0.78, 0.16, 0.16),
    "neutral": (0.45, 0.45, 0.45),
}


class ExportError(RuntimeError):
    """An export could not be serialized or written."""


def kpis_to_frame(kpis: list[KPIData]) -> pd.DataFrame:
    df = pd.DataFrame([k.model_dump() for k in kpis], columns=list(KPI_COLUMNS))
    return df.rename(columns=KPI_COLUMNS)


def headcount_to_frame(headcount: Optional[ExtendedHeadcount]) -> pd.DataFrame:
    columns = ["Département", "Effectif", "ETP"]
    if headcount is None:
        return pd.DataFrame(columns=columns)
    rows = [(d.department, d.count, d.etp) for d in headcount.department_breakdown]
    rows.append(("Total", headcount.total_headcount, headcount.total_etp))
    return pd.DataFrame(rows, columns=columns)


def kpis_to_csv(kpis: list[KPIData]) -> str:
    return kpis_to_frame(kpis).to_csv(index=False)


def kpis_to_excel(kpis: list[KPIData], headcount: Optional[ExtendedHeadcount] = None) -> bytes:
    """Workbook with a KPIs sheet and an Effectif (headcount by department) sheet."""
    buffer = io.BytesIO()
    try:
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            kpis_to_frame(kpis).to_excel(writer, sheet_name="KPIs", index=False)
            headcount_to_frame(headcount).to_excel(writer, sheet_name="Effectif", index=False)
    except (ValueError, OSError) as e:
        raise ExportError(f"Excel export failed: {e}") from e
    return buffer.getvalue()


def _pdf_text(text: str) -> str:
    # Standard Type 1 fonts only cover the Windows-1252 range
    return text.encode("cp1252", "ignore").decode("cp1252").strip()


def _wrap(text: str, width: int) -> list[str]:
    lines, line = [], ""
    for word in text.split():
        if line and len(line) + len(word) + 1 > width:
            lines.append(line)
            line = word
        else:
            line = f"{line} {word}".strip()
    if line:
        lines.append(line)
    return lines


def kpis_to_pdf(kpis: list[KPIData], title: str, insight: Optional[str] = None) -> bytes:
    """A4 KPI report: title, global insight, one block per KPI."""
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    page_w, page_h = A4
    x0, bottom = 18 * mm, 18 * mm
    y = page_h - 20 * mm

    def ensure_room(height):
        nonlocal y
        if y - height < bottom:
            c.showPage()
            y = page_h - 20 * mm

    c.setFont("Helvetica-Bold", 16)
    c.drawString(x0, y, _pdf_text(title))
    y -= 7 * mm
    c.setFont("Helvetica", 9)
    c.setFillColorRGB(0.4, 0.4, 0.4)
    c.drawString(x0, y, f"Généré le {datetime.now():%d/%m/%Y %H:%M}")
    y -= 10 * mm

    if insight:
        c.setFillColorRGB(0.1, 0.1, 0.1)
        c.setFont("Helvetica-Oblique", 10)
        for line in _wrap(_pdf_text(insight), 95):
            ensure_room(6 * mm)
            c.drawString(x0, y, line)
            y -= 5 * mm
        y -= 5 * mm

    for kpi in kpis:
        ensure_room(22 * mm)
        c.setFillColorRGB(*CATEGORY_COLORS[kpi.category])
        c.rect(x0, y - 1.5 * mm, 2 * mm, 6 * mm, fill=1, stroke=0)
        c.setFillColorRGB(0.1, 0.1, 0.1)
        c.setFont("Helvetica-Bold", 11)
        c.drawString(x0 + 5 * mm, y, _pdf_text(kpi.name))
        trend = "" if kpi.trend is None else f"  ({kpi.trend:+.1f} %)"
        c.drawRightString(page_w - x0, y, _pdf_text(f"{kpi.value} {kpi.unit}".strip() + trend))
        y -= 6 * mm
        c.setFont("Helvetica", 9)
        c.setFillColorRGB(0.3, 0.3, 0.3)
        for line in _wrap(_pdf_text(kpi.insight), 105):
            ensure_room(5 * mm)
            c.drawString(x0 + 5 * mm, y, line)
            y -= 4.5 * mm
        y -= 4 * mm

    c.save()
    return buffer.getvalue()


def kpis_to_json(kpis: list[KPIData], filters: Optional[FilterOptions] = None,
                 headcount: Optional[ExtendedHeadcount] = None) -> str:
    document = {
        "export_date": datetime.now().isoformat(timespec="seconds"),
        "filters": filters.model_dump(mode="json") if filters else None,
        "kpis": [k.model_dump(mode="json") for k in kpis],
    }
    if headcount is not None:
        document["headcount"] = headcount.model_dump(mode="json")
    return json.dumps(document, ensure_ascii=False, indent=2)


def export_filename(stem: str, extension: str, day: Optional[datetime] = None) -> str:
    """'kpis-rh', 'csv' -> 'kpis-rh-2024-05-01.csv'"""
    day = day or datetime.now()
    return f"{stem}-{day:%Y-%m-%d}.{extension}"


def write_export(content: Union[str, bytes], filename: str,
                 directory: Union[str, Path] = EXPORTS_DIR) -> Path:
    """Write an export document, creating the directory if needed."""
    path = Path(directory) / filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportError(f"Could not write {path}: {e}") from e
    console.print(f"  [green]Exported {path}[/green]")
    return path
