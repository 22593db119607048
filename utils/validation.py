"""
Validation of caller-supplied values at the input boundary.
"""
import math

from utils.errors import InvalidParameterError


def parse_display_z(text) -> float:
    """
    Parse the Z layer entered in the UI.

    Args:
        text: Raw text from the Z layer field (or a number from the slider)

    Returns:
        The layer height as a float

    Raises:
        InvalidParameterError: if the text is not a finite number
    """
    if isinstance(text, bool):
        raise InvalidParameterError(f"Z layer is not a number: {text!r}")
    if isinstance(text, (int, float)):
        value = float(text)
    elif text is not None and not isinstance(text, str):
        raise InvalidParameterError(f"Z layer is not a number: {text!r}")
    else:
        stripped = (text or "").strip()
        if not stripped:
            raise InvalidParameterError("Z layer is empty")
        try:
            value = float(stripped)
        except ValueError:
            raise InvalidParameterError(f"Z layer is not a number: {text!r}") from None

    if not math.isfinite(value):
        raise InvalidParameterError(f"Z layer must be finite, got {text!r}")
    return value
