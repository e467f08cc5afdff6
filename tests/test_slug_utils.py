import re

import pytest

from nepstay.utils.slug_utils import SlugHelper, generate_slug, to_base36


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Kathmandu Backpackers", "kathmandu-backpackers"),
        ("  Himalayan   Paradise  ", "himalayan-paradise"),
        ("Pokhara's Lake-Side Inn!", "pokharas-lake-side-inn"),
        ("snake_case__name", "snake-case-name"),
        ("---", ""),
        ("Café Hostel", "caf-hostel"),
        ("नमस्ते Hostel", "hostel"),
        ("Thamel Guest House २", "thamel-guest-house"),
    ],
)
def test_slugify(name, expected):
    assert SlugHelper.slugify(name) == expected


def test_to_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "z"
    assert to_base36(36) == "10"
    with pytest.raises(ValueError):
        to_base36(-1)


def test_generate_slug_appends_timestamp_suffix():
    slug = generate_slug("Kathmandu Backpackers")
    assert re.fullmatch(r"kathmandu-backpackers-[0-9a-z]+", slug)


def test_generate_slug_unique_for_same_name():
    slugs = {generate_slug("Kathmandu Backpackers") for _ in range(50)}
    assert len(slugs) == 50


def test_generate_slug_falls_back_when_name_has_no_slug_characters():
    assert generate_slug("!!!").startswith("hostel-")


def test_generate_slug_is_ascii_for_devanagari_names():
    slug = generate_slug("नमस्ते")
    assert slug.isascii()
    assert slug.startswith("hostel-")
