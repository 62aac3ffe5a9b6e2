# journal_app/api/routers/export.py
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse

from journal_app.api.dependencies import get_exporter
from journal_app.core.exceptions import ValidationError
from journal_app.services.export import ExportService

router = APIRouter(prefix="/export", tags=["Export"])


@router.get("", response_class=HTMLResponse)
def export_entries(
    start_date: date = Query(..., description="Start date (inclusive)"),
    end_date: date = Query(..., description="End date (inclusive)"),
    exporter: ExportService = Depends(get_exporter),
):
    """Printable document of every entry in the range, oldest first."""
    if start_date > end_date:
        raise ValidationError("start_date must be on or before end_date")

    html = exporter.render_html(start_date, end_date)
    filename = f"journal_{start_date:%Y%m%d}_{end_date:%Y%m%d}.html"
    return HTMLResponse(
        content=html,
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )
