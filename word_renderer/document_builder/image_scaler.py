"""Image Scaler Module

Computes aspect-ratio-preserving sizes for images placed in the document.
"""
import io
from typing import Optional, Tuple

from PIL import Image as PILImage

from ..config import DEFAULT_IMAGE_DPI
from ..document_model import Picture
from ..utils import content_type_for_format, get_logger, pixels_to_points

LOGGER = get_logger(__name__)


def scale_to_width(original_size: Tuple[float, float], target_width: float) -> Tuple[float, float]:
    """
    Scale a size uniformly so its width equals target_width.

    Args:
        original_size: (width, height) of the image
        target_width: Width the image must occupy

    Returns:
        (width, height) with the original aspect ratio

    Examples:
        >>> scale_to_width((800, 400), 400)
        (400.0, 200.0)
    """
    original_width, original_height = original_size
    ratio = target_width / original_width
    return original_width * ratio, original_height * ratio


def image_size_points(data: bytes, default_dpi: float = DEFAULT_IMAGE_DPI) -> Tuple[float, float, Optional[str]]:
    """
    Read an image's natural size in points.

    Args:
        data: Encoded image bytes
        default_dpi: DPI assumed when the file does not carry one

    Returns:
        Tuple of (width_pt, height_pt, pillow_format)
    """
    with PILImage.open(io.BytesIO(data)) as img:
        width_px, height_px = img.size
        dpi_x, dpi_y = img.info.get("dpi", (default_dpi, default_dpi))
        image_format = img.format

    # Some encoders write a zero DPI
    dpi_x = dpi_x or default_dpi
    dpi_y = dpi_y or default_dpi

    return pixels_to_points(width_px, dpi_x), pixels_to_points(height_px, dpi_y), image_format


class ImageScaler:
    """Builds Picture inlines sized to a target width."""

    def __init__(self, default_dpi: float = DEFAULT_IMAGE_DPI):
        self.default_dpi = default_dpi

    def fit(self, data: bytes, content_type: Optional[str], target_width: float) -> Picture:
        """
        Create a picture scaled to target_width, keeping its aspect ratio.

        The image bytes are copied so the caller's buffer is not retained.

        Args:
            data: Encoded image bytes
            content_type: MIME type declared by the caller
            target_width: Width in points (paragraph width or an explicit width)

        Returns:
            Picture with laid-out width and height in points
        """
        data = bytes(data)
        width, height, image_format = image_size_points(data, self.default_dpi)

        detected = content_type_for_format(image_format)
        if content_type and detected and content_type.lower() != detected:
            LOGGER.warning("Image declared as %s but decoded as %s", content_type, detected)

        scaled_width, scaled_height = scale_to_width((width, height), target_width)
        LOGGER.debug(
            "Scaled image %.1fx%.1fpt -> %.1fx%.1fpt", width, height, scaled_width, scaled_height
        )
        return Picture(
            data=data,
            content_type=content_type or detected,
            width=scaled_width,
            height=scaled_height,
        )
