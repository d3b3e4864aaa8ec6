#!/usr/bin/env python3
"""
Image to ASCII Art Pipeline - Configuration
===========================================
Input buffer, conversion settings, result container and named presets.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

from ascii_art_pipeline.constants import CharacterSet, DitherAlgorithm, EdgeMethod
from ascii_art_pipeline.errors import ConfigError, InvalidDimensionsError


# =============================================================================
# PIXEL BUFFER
# =============================================================================

@dataclass(frozen=True)
class PixelBuffer:
    """Row-major interleaved RGBA bytes, ``width * height * 4`` long."""

    width: int
    height: int
    data: bytes

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            try:
                data = bytes(self.data)
            except (TypeError, ValueError) as e:
                raise InvalidDimensionsError(
                    f"Pixel data must be a sequence of byte values 0-255: {e}"
                ) from None
            object.__setattr__(self, 'data', data)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def is_empty(self) -> bool:
        return len(self.data) == 0

    def validate(self) -> None:
        """Raise InvalidDimensionsError unless the size matches the shape."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensionsError(
                f"Buffer dimensions must be positive, got {self.width}x{self.height}"
            )
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise InvalidDimensionsError(
                f"Buffer of {self.width}x{self.height} needs {expected} bytes, got {len(self.data)}"
            )

    def to_array(self) -> np.ndarray:
        """Read-only (H, W, 4) uint8 view of the buffer."""
        self.validate()
        arr = np.frombuffer(self.data, dtype=np.uint8)
        return arr.reshape(self.height, self.width, 4)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'PixelBuffer':
        """Build a buffer from an (H, W, 4) or (H, W, 3) uint8 array."""
        arr = np.asarray(arr)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise InvalidDimensionsError(f"Expected an (H, W, 3|4) array, got shape {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr.astype(np.uint8), alpha], axis=2)
        height, width = arr.shape[:2]
        return cls(width=width, height=height, data=arr.astype(np.uint8).tobytes())

    @classmethod
    def filled(cls, width: int, height: int, rgba=(255, 255, 255, 255)) -> 'PixelBuffer':
        """Buffer where every pixel has the same RGBA value."""
        return cls(width=width, height=height, data=bytes(rgba) * (width * height))


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class ConversionConfig:
    """Configuration for a single conversion call."""

    # Target columns (used by the rasterizer, the buffer width rules the grid)
    width: int = 100

    # Tone adjustments
    brightness: float = 0.0                  # -100..100, added after contrast
    contrast: float = 0.0                    # -100..100, photo contrast formula
    blur: float = 0.0                        # Gaussian blur radius for rasterizing
    invert: bool = False

    # Character ramp
    charset: str = 'detailed'                # preset name or 'manual'
    manual_chars: str = '0'
    ignore_white: bool = True                # pure white pixels render as blank

    # Dithering
    dithering: bool = True
    dither_algorithm: Union[str, DitherAlgorithm] = DitherAlgorithm.FLOYD
    seed: Optional[int] = None               # seeds noise dithering

    # Edge detection
    edge_method: Union[str, EdgeMethod] = EdgeMethod.NONE
    edge_threshold: float = 100.0            # Sobel threshold on the 0-255 scale
    dog_threshold: float = 100.0             # contour threshold on suppressed magnitude

    def __post_init__(self):
        try:
            self.edge_method = EdgeMethod.parse(self.edge_method)
        except ValueError:
            raise ConfigError(f"Unknown edge method: {self.edge_method!r}") from None
        try:
            self.dither_algorithm = DitherAlgorithm.parse(self.dither_algorithm)
        except ValueError:
            raise ConfigError(f"Unknown dither algorithm: {self.dither_algorithm!r}") from None

        if not isinstance(self.charset, str):
            raise ConfigError(f"Charset must be a preset name or 'manual', got {self.charset!r}")
        if self.charset != CharacterSet.MANUAL and self.charset.lower() not in CharacterSet.presets():
            raise ConfigError(f"Unknown charset: {self.charset!r}")
        if self.width <= 0:
            raise ConfigError(f"Width must be positive, got {self.width}")
        if self.blur < 0:
            raise ConfigError(f"Blur radius cannot be negative, got {self.blur}")

    @property
    def dithering_active(self) -> bool:
        """Sobel output is binary, so it never goes through the dither stage."""
        return self.dithering and self.edge_method is EdgeMethod.NONE


@dataclass
class AsciiArtResult:
    """Result of ASCII art generation."""
    text: str                                          # rows, each followed by '\n'
    lines: List[str] = field(default_factory=list)
    width: int = 0
    height: int = 0
    edge_method: EdgeMethod = EdgeMethod.NONE


# =============================================================================
# PRESET CONFIGURATIONS
# =============================================================================

class Presets:
    """Predefined configuration presets."""

    @staticmethod
    def names() -> List[str]:
        return ['photo', 'text_banner', 'contour_sketch', 'edge_outline', 'retro_dither']

    @classmethod
    def get(cls, name: str, **overrides) -> ConversionConfig:
        """Build the named preset, replacing any fields given as keywords."""
        if name not in cls.names():
            raise ConfigError(f"Unknown preset: {name!r}")
        config = getattr(cls, name)()
        for key, value in overrides.items():
            if not hasattr(config, key):
                raise ConfigError(f"Unknown config field: {key!r}")
            setattr(config, key, value)
        # re-run coercion and checks on the overridden fields
        config.__post_init__()
        return config

    @staticmethod
    def photo() -> ConversionConfig:
        """Smooth tonal rendering for photographs."""
        return ConversionConfig(
            width=120,
            charset='standard',
            contrast=20,
            ignore_white=False,
            dither_algorithm=DitherAlgorithm.FLOYD,
        )

    @staticmethod
    def text_banner() -> ConversionConfig:
        """Rasterized text on a white background."""
        return ConversionConfig(
            width=100,
            charset='detailed',
            ignore_white=True,
            dithering=False,
        )

    @staticmethod
    def contour_sketch() -> ConversionConfig:
        """Directional line drawing from Difference-of-Gaussians contours."""
        return ConversionConfig(
            width=100,
            edge_method=EdgeMethod.DOG_CONTOUR,
            dog_threshold=10,
            contrast=30,
        )

    @staticmethod
    def edge_outline() -> ConversionConfig:
        """Binary Sobel outline."""
        return ConversionConfig(
            width=100,
            charset='binary',
            edge_method=EdgeMethod.SOBEL,
            edge_threshold=60,
            ignore_white=False,
        )

    @staticmethod
    def retro_dither() -> ConversionConfig:
        """Two-tone ordered dither."""
        return ConversionConfig(
            width=80,
            charset='manual',
            manual_chars='#.',
            dither_algorithm=DitherAlgorithm.ORDERED,
            ignore_white=False,
        )
