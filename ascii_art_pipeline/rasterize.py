#!/usr/bin/env python3
"""
Image to ASCII Art Pipeline - Rasterizer
========================================
Produce pixel buffers from images and text with Pillow.

Heights are scaled by CHAR_ASPECT_RATIO so that one pixel maps to one
monospace character cell without stretching the picture.
"""

import logging
import math
from typing import Optional, Union

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont, UnidentifiedImageError

from ascii_art_pipeline.config import PixelBuffer
from ascii_art_pipeline.constants import CHAR_ASPECT_RATIO
from ascii_art_pipeline.errors import RasterizeError

logger = logging.getLogger(__name__)

MONOSPACE_FONTS = ('DejaVuSansMono.ttf', 'LiberationMono-Regular.ttf', 'Menlo.ttc', 'consola.ttf')
TEXT_MARGIN = 10


def load_image(path: str) -> Image.Image:
    """Open an image file, raising RasterizeError when it cannot be decoded."""
    try:
        image = Image.open(path)
        image.load()
    except (OSError, UnidentifiedImageError) as e:
        raise RasterizeError(f"Cannot load image {path!r}: {e}") from e
    return image


def _flatten(image: Image.Image) -> Image.Image:
    """Composite transparency over white and return an RGBA image."""
    img = image.convert('RGBA')
    background = Image.new('RGBA', img.size, (255, 255, 255, 255))
    return Image.alpha_composite(background, img)


def _to_buffer(image: Image.Image, blur: float) -> PixelBuffer:
    if blur > 0:
        image = image.filter(ImageFilter.GaussianBlur(radius=blur))
    return PixelBuffer.from_array(np.array(image.convert('RGBA'), dtype=np.uint8))


def scaled_height(image_width: int, image_height: int, width: int) -> int:
    """Rows needed for ``width`` columns, compensating for tall glyphs."""
    return max(1, math.floor(image_height / image_width * width * CHAR_ASPECT_RATIO))


def image_to_buffer(image: Union[str, Image.Image], width: int,
                    blur: float = 0.0) -> PixelBuffer:
    """
    Rasterize an image to ``width`` columns.

    Args:
        image: PIL Image or path to an image file
        width: Target columns
        blur: Gaussian blur radius applied after resizing

    Returns:
        PixelBuffer of ``width`` x scaled height
    """
    if isinstance(image, str):
        image = load_image(image)

    img_width, img_height = image.size
    if img_width == 0 or img_height == 0:
        raise RasterizeError(f"Image has no pixels: {image.size}")

    height = scaled_height(img_width, img_height, width)
    resized = _flatten(image).resize((width, height), Image.Resampling.LANCZOS)
    logger.debug("Rasterized %dx%d image to %dx%d", img_width, img_height, width, height)
    return _to_buffer(resized, blur)


def load_font(size: int, font: Optional[str] = None) -> ImageFont.ImageFont:
    """Monospace TrueType font of ``size`` pixels, or Pillow's built-in font."""
    candidates = (font,) if font else MONOSPACE_FONTS
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    if font:
        raise RasterizeError(f"Cannot load font {font!r}")
    logger.debug("No monospace font found, using Pillow default")
    return ImageFont.load_default(size=size)


def fit_font(draw: ImageDraw.ImageDraw, line: str, size: int, max_width: int,
             font: Optional[str] = None) -> ImageFont.ImageFont:
    """Largest font up to ``size`` whose rendering of ``line`` fits in ``max_width``."""
    face = load_font(size, font)
    length = draw.textlength(line, font=face)
    while length > max_width and size > 1:
        size = max(1, min(size - 1, math.floor(size * max_width / length)))
        face = load_font(size, font)
        length = draw.textlength(line, font=face)
    return face


def text_to_buffer(text: str, width: int, blur: float = 0.0,
                   font: Optional[str] = None) -> Optional[PixelBuffer]:
    """
    Draw ``text`` as black monospace lines centered on a white canvas.

    The canvas is ``width`` x ``floor(width * 0.55)``, the font is
    ``floor(width / 8)`` pixels and the lines share the height equally.
    A line wider than the canvas minus a TEXT_MARGIN on each side is
    drawn with a smaller font so it fits.

    Returns:
        PixelBuffer, or None when the text is blank
    """
    if not text.strip():
        return None

    height = max(1, math.floor(width * CHAR_ASPECT_RATIO))
    canvas = Image.new('RGBA', (width, height), (255, 255, 255, 255))
    draw = ImageDraw.Draw(canvas)
    size = max(1, width // 8)
    max_width = max(1, width - 2 * TEXT_MARGIN)

    lines = text.split('\n')
    line_height = height / max(len(lines), 1)
    for index, line in enumerate(lines):
        face = fit_font(draw, line, size, max_width, font)
        draw.text((width / 2, line_height * (index + 0.5)), line,
                  fill=(0, 0, 0, 255), font=face, anchor='mm')

    return _to_buffer(canvas, blur)
