"""
Exception classes shared by the color and conversion tools.
"""


class ColorToolsError(Exception):
    """Base class for every error raised by this project."""

    def __init__(self, message, context=""):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self):
        if self.context:
            return f"[{self.context}] {self.message}"
        return self.message


class InvalidFormat(ColorToolsError, ValueError):
    """
    Raised for a malformed hex color.

    Examples:
        - "not-a-color"
        - "#12345" (too short)
        - "00d66f" (missing '#')
    """

    def __init__(self, message, value=""):
        self.value = value
        super().__init__(message, context="hex")


class InvalidInput(ColorToolsError, ValueError):
    """Raised when a conversion input is not a finite number."""

    def __init__(self, message, value=None):
        self.value = value
        super().__init__(message, context="input")


class UnknownUnit(ColorToolsError, ValueError):
    def __init__(self, message, unit_id=""):
        self.unit_id = unit_id
        super().__init__(message, context="units")


class UnknownCurrency(ColorToolsError, ValueError):
    def __init__(self, message, code=""):
        self.code = code
        super().__init__(message, context="currency")


class ImageLoadError(ColorToolsError):
    """Raised when an image cannot be opened or decoded."""

    def __init__(self, message, source=""):
        self.source = source
        super().__init__(message, context="image")
