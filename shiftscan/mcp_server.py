"""shiftscan MCP server.

Exposes tools for shift extraction from OCR text (free-form and roster grid),
local persistence of the resulting records, calendar queries, and XLSX export.
"""
from __future__ import annotations

import argparse
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

from mcp.server.fastmcp import FastMCP

from extraction_core.extractor import extract_async, extract_table_async
from extraction_core.io.xlsx import render_schedule_xlsx
from extraction_core.models import ShiftEntry

from .config import (
    RuntimeConfig,
    configure_logging,
    load_env,
    resolve_target_name,
    runtime_config,
)
from .storage import (
    delete_shift as _delete_shift,
    list_shifts as _list_shifts,
    load_schedule,
    save_schedule as _save_schedule,
    save_shifts as _save_shifts,
    shifts_between as _shifts_between,
    shifts_for_date as _shifts_for_date,
    shifts_for_month as _shifts_for_month,
    shifts_for_week as _shifts_for_week,
)
from .utils import ensure_date, week_days

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "shiftscan",
    host=os.getenv("HOST", "127.0.0.1"),
    port=int(os.getenv("PORT", "8000")),
    instructions=(
        "Shift extraction for OCR'd shift schedules. "
        "Extracts one person's shifts from free-form text or every employee's "
        "shifts from a roster grid, stores finalized shifts locally, and "
        "answers day/week/month calendar queries."
    ),
)

_ENV_FILE: str | None = None


def _config() -> RuntimeConfig:
    load_env(_ENV_FILE or os.getenv("SHIFTSCAN_ENV_FILE"))
    return runtime_config()


def _artifact_root() -> Path:
    return _config().artifact_root


def _today(value: str | None) -> date | None:
    return ensure_date(value) if value else None


# -- Extraction --

@mcp.tool()
async def extract_shifts(
    text: str,
    name: str | None = None,
    today: str | None = None,
    save: bool = False,
) -> dict[str, Any]:
    """Extract one person's shifts from free-form OCR text.

    *name* defaults to SHIFTSCAN_USER_NAME. *today* (YYYY-MM-DD) sets the year
    used for dates written without one. With save=True the shifts are stored.
    """
    cfg = _config()
    target = resolve_target_name(name, cfg)
    entries = await extract_async(text, target, today=_today(today))
    result: dict[str, Any] = {
        "name": target,
        "count": len(entries),
        "shifts": [e.to_dict() for e in entries],
    }
    if save and entries:
        result["saved"] = _save_shifts(cfg.artifact_root, entries, employee_name=target, source="extract")
    return result


@mcp.tool()
async def extract_shift_table(text: str, today: str | None = None, save: bool = False) -> dict[str, Any]:
    """Extract every employee's shifts from a roster grid (header row of dates)."""
    schedule = await extract_table_async(text, today=_today(today))
    result: dict[str, Any] = {
        "employees": {name: [e.to_dict() for e in entries] for name, entries in schedule.items()},
        "count": sum(len(v) for v in schedule.values()),
    }
    if save and schedule:
        result["saved"] = _save_schedule(_artifact_root(), schedule, source="extract_table")
    return result


# -- Storage --

@mcp.tool()
def save_extracted_shifts(
    shifts: list[dict[str, Any]],
    employee_name: str = "",
    source: str | None = None,
) -> list[dict[str, Any]]:
    """Store shifts previously returned by an extraction tool."""
    entries = [ShiftEntry.from_dict(s) for s in shifts]
    return _save_shifts(_artifact_root(), entries, employee_name=employee_name, source=source)


@mcp.tool()
def list_saved_shifts(employee_name: str | None = None, limit: int = 100) -> list[dict[str, Any]]:
    """List stored shifts sorted by date and start time."""
    return _list_shifts(_artifact_root(), employee_name=employee_name)[:limit]


@mcp.tool()
def shifts_on_day(day: str, employee_name: str | None = None) -> list[dict[str, Any]]:
    """Stored shifts on one day (YYYY-MM-DD)."""
    return _shifts_for_date(_artifact_root(), day, employee_name=employee_name)


@mcp.tool()
def shifts_in_week(day: str, employee_name: str | None = None) -> dict[str, Any]:
    """Stored shifts of the Sunday-to-Saturday week containing *day*."""
    days = week_days(ensure_date(day))
    return {
        "days": [d.isoformat() for d in days],
        "shifts": _shifts_for_week(_artifact_root(), day, employee_name=employee_name),
    }


@mcp.tool()
def shifts_in_month(year: int, month: int, employee_name: str | None = None) -> list[dict[str, Any]]:
    """Stored shifts of one calendar month."""
    return _shifts_for_month(_artifact_root(), year, month, employee_name=employee_name)


@mcp.tool()
def delete_saved_shift(shift_id: str) -> dict[str, Any]:
    """Delete a stored shift by id."""
    return {"shift_id": shift_id, "deleted": _delete_shift(_artifact_root(), shift_id)}


@mcp.tool()
def export_schedule_xlsx(start: str, end: str, path: str | None = None) -> dict[str, Any]:
    """Export stored shifts in [start, end] to an XLSX workbook (Shifts + Roster sheets)."""
    root = _artifact_root()
    records = _shifts_between(root, start, end)
    target = Path(path) if path else root / "exports" / f"shifts_{start}_{end}.xlsx"
    render_schedule_xlsx(load_schedule(records), target)
    return {"path": str(target), "count": len(records)}


# -- Server entrypoints --

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
PUBLIC_PATHS = frozenset({"/health"})


def http_bind() -> tuple[str, int]:
    """HOST/PORT for the HTTP transport."""
    return os.getenv("HOST", DEFAULT_HOST), int(os.getenv("PORT", str(DEFAULT_PORT)))


def is_authorized(path: str, authorization: str, api_key: str | None) -> bool:
    """Bearer check; open when no key is configured or the path is public."""
    if not api_key or path in PUBLIC_PATHS:
        return True
    scheme, _, token = authorization.partition(" ")
    return scheme == "Bearer" and token == api_key


def build_http_app(api_key: str | None = None):
    """Streamable-HTTP app with a public /health route and optional bearer auth."""
    from starlette.middleware.base import BaseHTTPMiddleware
    from starlette.responses import JSONResponse
    from starlette.routing import Route

    class BearerAuth(BaseHTTPMiddleware):
        async def dispatch(self, request, call_next):
            if not is_authorized(request.url.path, request.headers.get("authorization", ""), api_key):
                logger.warning("Rejected unauthenticated request to %s", request.url.path)
                return JSONResponse({"error": "unauthorized"}, status_code=401)
            return await call_next(request)

    async def health(request):
        return JSONResponse({"status": "ok", "service": "shiftscan"})

    app = mcp.streamable_http_app()
    if api_key:
        app.add_middleware(BearerAuth)
    app.routes.append(Route("/health", health))
    return app


async def _run_http() -> None:
    import uvicorn

    api_key = os.getenv("MCP_API_KEY") or None
    host, port = http_bind()
    logger.info("Serving shiftscan over HTTP on %s:%d (auth %s)", host, port, "on" if api_key else "off")
    server = uvicorn.Server(uvicorn.Config(build_http_app(api_key), host=host, port=port, log_level="info"))
    await server.serve()


def main(argv: list[str] | None = None) -> None:
    global _ENV_FILE

    parser = argparse.ArgumentParser(description="Run the shiftscan MCP server")
    parser.add_argument("--env-file", default=None, help="Path to .env file")
    parser.add_argument(
        "--transport",
        default=None,
        choices=["stdio", "sse", "streamable-http"],
        help="MCP transport (default: streamable-http when PORT is set, else stdio)",
    )
    args = parser.parse_args(argv)
    _ENV_FILE = args.env_file

    cfg = _config()
    configure_logging(cfg.log_level)

    transport = args.transport or ("streamable-http" if os.getenv("PORT") else "stdio")
    logger.info("Artifacts in %s; transport %s", cfg.artifact_root, transport)

    if transport == "streamable-http":
        import anyio
        anyio.run(_run_http)
    else:
        mcp.run(transport=transport)


if __name__ == "__main__":
    main()
