"""
schemas/common.py

- Shared response schemas (Pydantic v2)
  1) error response: ErrorDetail, ErrorResponse
  2) success envelope helper: ok()
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, ConfigDict


# =========================================================
# 1) error response
# =========================================================

class ErrorDetail(BaseModel):
    """Smallest unit carrying an error code and a one-line message."""
    code: str = Field(..., description="Error code (e.g. VALIDATION_ERROR, REMOTE_STORE_ERROR)")
    message: str = Field(..., description="Human readable one-line notice")


class ErrorResponse(BaseModel):
    """
    Body returned by the global error handlers
    (middlewares/error_handler.py)
    """
    success: bool = False
    error: ErrorDetail
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Response timestamp (UTC)"
    )

    model_config = ConfigDict(extra="ignore")


# =========================================================
# 2) success envelope
# =========================================================

def ok(data: Any, message: Optional[str] = None) -> dict:
    """{"success": true, "data": ..., "message": ...} used by every router."""
    return {"success": True, "data": data, "message": message}
