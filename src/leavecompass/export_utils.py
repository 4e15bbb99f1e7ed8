import csv
import logging
import os
from typing import List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from leavecompass.calendar_logic import format_dd_mm_yyyy
from leavecompass.models import Entitlement, LeaveRequest
from leavecompass.statistics import summarize_usage

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
CSV_HEADER = ["start_date", "end_date", "days", "type", "status"]


def _fmt_days(days: float) -> str:
    return f"{days:g}"


def format_request_window(req: LeaveRequest) -> str:
    """
    Kurzbeschreibung eines Antrags, z. B.
    'Mon 03/03/2025 - Fri 07/03/2025 | 5 days | Annual Leave (Approved)'.
    """
    start = f"{WEEKDAY_NAMES[req.start.weekday()]} {format_dd_mm_yyyy(req.start)}"
    if req.end == req.start:
        span = start
    else:
        span = f"{start} - {WEEKDAY_NAMES[req.end.weekday()]} {format_dd_mm_yyyy(req.end)}"
    unit = "day" if req.days == 1 else "days"
    return f"{span} | {_fmt_days(req.days)} {unit} | {req.type} ({req.status})"


def export_history_csv(requests: List[LeaveRequest], filename: str):
    try:
        with open(filename, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(CSV_HEADER)
            for r in requests:
                writer.writerow([format_dd_mm_yyyy(r.start), format_dd_mm_yyyy(r.end),
                                 _fmt_days(r.days), r.type, r.status])
    except OSError as e:
        logging.error(f"CSV-Export fehlgeschlagen: {e}")
        raise


def export_report_pdf(ent: Entitlement, requests: List[LeaveRequest], filename: str,
                      holiday_year: Optional[int] = None, chart_png: Optional[str] = None):
    """PDF-Bericht: Saldo-Übersicht, Antragsliste, optional ein Diagramm."""
    summary = summarize_usage(ent)
    c = canvas.Canvas(filename, pagesize=A4)
    w, h = A4
    y = h - 50
    c.setFont('Helvetica-Bold', 14)
    title = 'Holiday Report' if holiday_year is None else f'Holiday Report {holiday_year}'
    c.drawString(50, y, title)
    y -= 30
    c.setFont('Helvetica', 10)
    if ent.holiday_cycle_start or ent.holiday_cycle_end:
        c.drawString(50, y, f"Holiday year: {ent.holiday_cycle_start} - {ent.holiday_cycle_end}")
        y -= 20
    for label, key in (("Entitlement", 'entitlement'), ("Booked", 'booked'),
                       ("Christmas", 'xmas'), ("Carried forward", 'carry_forward'),
                       ("Remaining", 'remaining')):
        c.drawString(50, y, f"{label}: {summary[key]:.2f} days")
        y -= 15
    y -= 15

    c.setFont('Helvetica-Bold', 12)
    c.drawString(50, y, f"Requests ({len(requests)})")
    y -= 20
    c.setFont('Helvetica', 10)
    for r in requests:
        if y < 60:
            c.showPage()
            y = h - 50
            c.setFont('Helvetica', 10)
        c.drawString(60, y, format_request_window(r))
        y -= 15

    if chart_png:
        if not os.path.exists(chart_png):
            logging.error(f"Diagramm '{chart_png}' nicht gefunden, PDF ohne Grafik")
        else:
            c.showPage()
            size = 250
            c.drawImage(chart_png, (w - size) / 2, h - 50 - size, width=size, height=size)
    try:
        c.save()
    except OSError as e:
        logging.error(f"PDF-Export fehlgeschlagen: {e}")
        raise
