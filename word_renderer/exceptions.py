"""Custom Exception Hierarchy

Exception hierarchy for word-renderer. Only conditions the builder decides on
itself are raised from here; errors coming out of the rendering backends
(python-docx, reportlab, Pillow) reach the caller unchanged.
"""


class WordRendererError(Exception):
    """Base exception for all word-renderer errors.

    Catching this exception will catch every error the builder raises itself.
    """
    pass


# Validation Errors
class ValidationError(WordRendererError):
    """Raised when an input is outside what the builder supports."""
    pass


class InvalidConfigurationError(ValidationError):
    """Raised when render options are invalid."""
    pass


class UnsupportedHeadingLevelError(ValidationError):
    """Raised when a heading level has no registered style."""

    def __init__(self, level: int, supported: list):
        self.level = level
        self.supported = supported
        super().__init__(
            f"Heading level {level} is not supported; "
            f"registered levels are {', '.join(str(x) for x in supported)}"
        )


class UnsupportedExportFormatError(ValidationError):
    """Raised when an export format is requested that no backend handles."""

    def __init__(self, output_format: str):
        self.output_format = output_format
        super().__init__(f"Unsupported export format '{output_format}' (expected 'docx' or 'pdf')")


# Layout Errors
class LayoutError(WordRendererError):
    """Base class for layout computation errors."""
    pass


class ColumnFitError(LayoutError):
    """Raised when fixed column widths leave no room for relative columns."""

    def __init__(self, fixed_width: float, available_width: float):
        self.fixed_width = fixed_width
        self.available_width = available_width
        super().__init__(
            f"Fixed column widths ({fixed_width:.2f}pt) exceed the available "
            f"width ({available_width:.2f}pt); relative columns cannot be fitted"
        )


# Rendering Errors
class RenderingError(WordRendererError):
    """Base class for export rendering errors."""
    pass


class FontError(RenderingError):
    """Raised when font setup or registration fails."""
    pass
