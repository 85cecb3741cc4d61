"""Configuration Constants

Constants for document model construction and export.
"""

# Content Types
WORD_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_CONTENT_TYPE = "application/pdf"

# Typography
DEFAULT_FONT_NAME = "Montserrat"
DEFAULT_BASE_FONT_SIZE = 11  # points
DEFAULT_FONTS_DIR = "."
LINE_HEIGHT_FACTOR = 1.2  # leading = font size * factor

# Heading Styles (level -> style definition)
# Multipliers are relative to the base font size and must strictly decrease.
HEADING_STYLES = {
    2: {"name": "H2", "size_multiplier": 2.00, "bold": False},
    3: {"name": "H3", "size_multiplier": 1.75, "bold": False},
    4: {"name": "H4", "size_multiplier": 1.50, "bold": True},
    5: {"name": "H5", "size_multiplier": 1.25, "bold": True},
    6: {"name": "H6", "size_multiplier": 1.10, "bold": True},
}
SUBTITLE_HEADING_LEVEL = 3

# Page Geometry (points)
PAGE_SIZES = {
    "A4": (595.2756, 841.8898),
    "LETTER": (612.0, 792.0),
}
DEFAULT_PAGE_SIZE = "A4"
DEFAULT_MARGIN = 72.0  # 1 inch on every side
HEADER_DISTANCE = 36.0  # distance from page top to header
FOOTER_DISTANCE = 36.0  # distance from page bottom to footer

# Tables
BAND_COLOR = (240, 240, 240)
CELL_PADDING = 4.0

# Header
HEADER_SPACE_AFTER = 24.0

# Section Break (thin horizontal rule)
SECTION_BREAK_THICKNESS = 0.1
SECTION_BREAK_COLOR = (211, 211, 211)
SECTION_BREAK_PADDING = 10.0

# Hyperlinks
HYPERLINK_COLOR = (5, 99, 193)

# Images
DEFAULT_IMAGE_DPI = 96.0

# Environment Variables
ENV_FONT_NAME = "WORD_RENDERER_FONT_NAME"
ENV_BASE_FONT_SIZE = "WORD_RENDERER_BASE_FONT_SIZE"
ENV_FONTS_DIR = "WORD_RENDERER_FONTS_DIR"
ENV_PAGE_SIZE = "WORD_RENDERER_PAGE_SIZE"
ENV_HEADING_STYLES = "WORD_RENDERER_HEADING_STYLES"
