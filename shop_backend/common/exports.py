"""
PATH: common/exports.py

CSV / JSON EXPORT DOWNLOADS

Used by the admin console "Export" buttons:
- ?format=csv (default) -> header row + one quoted row per record
- ?format=json          -> pretty JSON array of the same records
- filename: <resource>_<YYYY-MM-DD>.<ext>
"""

from __future__ import annotations

import csv
import io
import json
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from django.core.serializers.json import DjangoJSONEncoder
from django.http import HttpResponse
from django.utils import timezone

EXPORT_FORMAT_CSV = "csv"
EXPORT_FORMAT_JSON = "json"
EXPORT_FORMATS = {EXPORT_FORMAT_CSV, EXPORT_FORMAT_JSON}

# (row key, column header)
Column = tuple[str, str]


class ExportFormatError(ValueError):
    """Raised when an unsupported export format is requested."""


def resolve_format(raw) -> str:
    fmt = str(raw or EXPORT_FORMAT_CSV).strip().lower()
    if fmt not in EXPORT_FORMATS:
        raise ExportFormatError(f"Unsupported export format '{fmt}'. Use csv or json.")
    return fmt


def export_filename(resource: str, ext: str, *, on: Optional[date] = None) -> str:
    day = on or timezone.localdate()
    return f"{resource}_{day.isoformat()}.{ext}"


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return ", ".join(_cell(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, cls=DjangoJSONEncoder, sort_keys=True)
    return str(value)


def rows_to_csv(columns: Sequence[Column], rows: Iterable[dict[str, Any]]) -> str:
    """
    Every cell is quoted; embedded quotes are doubled.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([header for _, header in columns])
    for row in rows:
        writer.writerow([_cell(row.get(key)) for key, _ in columns])
    return buf.getvalue()


def rows_to_json(columns: Sequence[Column], rows: Iterable[dict[str, Any]]) -> str:
    keys = [key for key, _ in columns]
    payload = [{key: row.get(key) for key in keys} for row in rows]
    return json.dumps(payload, cls=DjangoJSONEncoder, indent=2)


def export_response(
    *,
    resource: str,
    columns: Sequence[Column],
    rows: Iterable[dict[str, Any]],
    fmt: str = EXPORT_FORMAT_CSV,
) -> HttpResponse:
    fmt = resolve_format(fmt)
    rows = list(rows)

    if fmt == EXPORT_FORMAT_JSON:
        body = rows_to_json(columns, rows)
        content_type = "application/json"
    else:
        body = rows_to_csv(columns, rows)
        content_type = "text/csv; charset=utf-8"

    response = HttpResponse(body, content_type=content_type)
    response["Content-Disposition"] = (
        f'attachment; filename="{export_filename(resource, fmt)}"'
    )
    return response
