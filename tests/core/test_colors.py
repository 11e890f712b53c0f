"""Tests for tag color assignment."""

from librarian.core.colors import PALETTE, color_index, string_hash, tag_color


class TestStringHash:
    """Test the palette hash."""

    def test_empty_string(self):
        assert string_hash("") == 0

    def test_single_character(self):
        assert string_hash("a") == 97

    def test_two_characters(self):
        # 98 + ((97 << 5) - 97)
        assert string_hash("ab") == 3105

    def test_long_string_stays_bounded(self):
        value = string_hash("science fiction and fantasy " * 20)
        assert abs(value) < 2**53

    def test_astral_characters_use_code_units(self):
        # U+1F4DA is the surrogate pair D83D DCDA
        expected = 0xDCDA + ((0xD83D << 5) - 0xD83D)
        assert string_hash("\U0001f4da") == expected


class TestColorIndex:
    """Test palette selection."""

    def test_known_indices(self):
        assert color_index("") == 0
        assert color_index("a") == 97 % len(PALETTE)
        assert color_index("ab") == 3105 % len(PALETTE)

    def test_deterministic(self):
        assert color_index("Science Fiction") == color_index("Science Fiction")

    def test_always_in_range(self):
        for name in ["", "x", "Fantasy", "Ünïcödé", "a" * 500, "-" * 1000]:
            assert 0 <= color_index(name) < len(PALETTE)

    def test_tag_color(self):
        color = tag_color("a")

        assert color is PALETTE[12]
        assert color.name == "violet"
        assert str(color) == "violet"
