# SPDX-License-Identifier: Apache-2.0
"""Color token resolution."""

from __future__ import annotations

import re
from typing import Optional

from .models import BLACK, RGB

# Named colors accepted by browser clients (0-255 channels)
NAMED_COLORS: dict[str, tuple[int, int, int]] = {
    "red": (255, 0, 0),
    "blue": (0, 0, 255),
    "green": (0, 255, 0),
    "yellow": (255, 255, 0),
    "orange": (255, 200, 0),
    "pink": (255, 175, 175),
    "purple": (255, 0, 255),
    "magenta": (255, 0, 255),
    "cyan": (0, 255, 255),
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "darkgray": (64, 64, 64),
    "darkgrey": (64, 64, 64),
    "lightgray": (192, 192, 192),
    "lightgrey": (192, 192, 192),
}

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


class ColorResolver:
    """Resolve color tokens to normalized RGB.

    ``resolve`` never fails: blank, unknown and malformed tokens all map
    to opaque black.
    """

    def __init__(self, named_colors: Optional[dict[str, tuple[int, int, int]]] = None) -> None:
        """Initialize ColorResolver.

        Args:
            named_colors: Name -> (r, g, b) table. Defaults to NAMED_COLORS.
        """
        self._named = {
            name.lower(): rgb for name, rgb in (named_colors or NAMED_COLORS).items()
        }

    def resolve(self, token: Optional[str]) -> RGB:
        """Resolve a color token.

        Resolution order: blank -> black, strip one leading '#', named color,
        6 hex digits, 3 hex digits (each digit doubled), otherwise black.

        Args:
            token: Named color or hex string, with or without '#'.

        Returns:
            RGB with channels in [0, 1].
        """
        if token is None or not token.strip():
            return BLACK

        value = token.strip()
        if value.startswith("#"):
            value = value[1:]

        named = self._named.get(value.lower())
        if named is not None:
            return RGB.from_bytes(*named)

        if not _HEX_RE.match(value):
            return BLACK
        if len(value) == 3:
            value = "".join(ch * 2 for ch in value)
        if len(value) != 6:
            return BLACK

        return RGB.from_bytes(
            int(value[0:2], 16),
            int(value[2:4], 16),
            int(value[4:6], 16),
        )
