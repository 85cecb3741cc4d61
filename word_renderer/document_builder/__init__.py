"""Document Builder Package

This package provides components for building documents from authoring calls:

Core Classes:
- ContentBuilder: Main orchestrator class (from builder.py)
- StyleRegistry: Heading styles keyed by level
- TextRunSplitter: Runs and line breaks from text requests
- ImageScaler: Aspect-ratio-preserving image sizing
- TableLayoutEngine: Column widths and banded rows
- HeaderCompositor / FooterCompositor: Running header and footer
- FontManager: Font registration for PDF export

Helper Functions:
- render_content_list: Build and export a document from dict items
- compute_column_widths: Resolve mixed fixed/relative column widths
- scale_to_width: Aspect-ratio-preserving resize
"""

# Import core classes
from .builder import ContentBuilder, render_content_list
from .style_registry import StyleRegistry
from .text_splitter import TextRunSplitter
from .image_scaler import ImageScaler, scale_to_width, image_size_points
from .table_layout import TableLayoutEngine, compute_column_widths, apply_banding
from .header_compositor import HeaderCompositor, FooterCompositor
from .font_manager import FontManager

# Expose public API
__all__ = [
    # Main builder class
    'ContentBuilder',

    # Helper functions
    'render_content_list',
    'compute_column_widths',
    'apply_banding',
    'scale_to_width',
    'image_size_points',

    # Component classes
    'StyleRegistry',
    'TextRunSplitter',
    'ImageScaler',
    'TableLayoutEngine',
    'HeaderCompositor',
    'FooterCompositor',
    'FontManager',
]
