from __future__ import annotations

from fastapi.responses import JSONResponse


def ui_result(ok: bool, message: str, details: str | None = None) -> dict:
    """Unified result shape for API errors and reports.

    Format:
      {"ok": bool, "message": str, "details": str}
    """

    return {
        "ok": bool(ok),
        "message": str(message or ""),
        "details": str(details or ""),
    }


def error_response(message: str, details: str | None = None, *, status_code: int = 400) -> JSONResponse:
    return JSONResponse(ui_result(False, message, details), status_code=status_code)
