"""
Standard response envelope: ``{message, data, success}``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from utils.schemas import Envelope


def success_response(message: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return Envelope(message=message, data=data or {}, success=True).model_dump()


def error_response(message: str) -> Dict[str, Any]:
    return Envelope(message=message, data={}, success=False).model_dump()
