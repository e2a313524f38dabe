"""
Common API schemas.
"""

from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, BeforeValidator

_TRUE_STRINGS = {"yes", "true", "1", "on"}
_FALSE_STRINGS = {"no", "false", "0", "off", ""}


def parse_yes_no(value: Any) -> Any:
    """Turn the booking form's "yes"/"no" strings into booleans."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    if value is None:
        return False
    return value


YesNo = Annotated[bool, BeforeValidator(parse_yes_no)]


class BaseResponse(BaseModel):
    """Base response schema."""

    success: bool = True
    message: Optional[str] = None


class ErrorResponse(BaseResponse):
    """Error response schema."""

    success: bool = False
    error_type: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
