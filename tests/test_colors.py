# SPDX-License-Identifier: Apache-2.0
"""Tests for ColorResolver."""

from __future__ import annotations

import pytest

from pdf_annotator.core.colors import NAMED_COLORS, ColorResolver
from pdf_annotator.core.models import BLACK, RGB


@pytest.fixture
def resolver() -> ColorResolver:
    return ColorResolver()


def _reference_hex(value: str) -> RGB:
    """Independent hex expansion used to check the resolver."""
    if len(value) == 3:
        value = value[0] * 2 + value[1] * 2 + value[2] * 2
    return RGB.from_bytes(*bytes.fromhex(value))


class TestNamedColors:
    """Tests for named color lookup."""

    @pytest.mark.parametrize("name", sorted(NAMED_COLORS))
    def test_every_named_color(self, resolver: ColorResolver, name: str) -> None:
        assert resolver.resolve(name) == RGB.from_bytes(*NAMED_COLORS[name])

    def test_case_insensitive(self, resolver: ColorResolver) -> None:
        assert resolver.resolve("RED") == RGB(1.0, 0.0, 0.0)
        assert resolver.resolve("  Blue ") == RGB(0.0, 0.0, 1.0)

    def test_orange_matches_awt_value(self, resolver: ColorResolver) -> None:
        """Orange is (255, 200, 0), not the CSS orange."""
        assert resolver.resolve("orange").to_bytes() == (255, 200, 0)

    def test_custom_table(self) -> None:
        resolver = ColorResolver(named_colors={"Brand": (10, 20, 30)})
        assert resolver.resolve("brand").to_bytes() == (10, 20, 30)
        assert resolver.resolve("red") == BLACK


class TestHexColors:
    """Tests for hex color parsing."""

    @pytest.mark.parametrize(
        "value",
        ["000", "fff", "f0a", "ABC", "123", "000000", "ffffff", "1a2b3c", "FF8800", "c0ffee"],
    )
    def test_matches_reference_parser(self, resolver: ColorResolver, value: str) -> None:
        assert resolver.resolve(value) == _reference_hex(value)
        assert resolver.resolve(f"#{value}") == _reference_hex(value)

    def test_short_form_doubles_digits(self, resolver: ColorResolver) -> None:
        assert resolver.resolve("#f80").to_bytes() == (255, 136, 0)

    def test_channels_normalized(self, resolver: ColorResolver) -> None:
        color = resolver.resolve("#ff0000")
        assert color.r == 1.0
        assert color.g == 0.0
        assert color.b == 0.0


class TestFallback:
    """Malformed tokens resolve to black instead of failing."""

    @pytest.mark.parametrize(
        "token",
        [None, "", "   ", "not-a-color", "#", "#12", "#1234", "#12345", "#1234567", "#ggg", "#zzzzzz"],
    )
    def test_black(self, resolver: ColorResolver, token: str | None) -> None:
        assert resolver.resolve(token) == BLACK
