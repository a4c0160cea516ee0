import random

import pytest

from icon_exporter.emit import constants_source
from icon_exporter.models import AssetRecord
from icon_exporter.normalize import (
    IconNameError,
    assign_icons,
    collation_key,
    normalize_name,
    resolve_collision,
)
from icon_exporter.rules import IDENTIFIER_PATTERN


def icon(name, origin="Icons/Misc", url="https://cdn.example.com/icon.svg"):
    return AssetRecord(display_name=name, origin_path=origin, resource_url=url)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Arrow Left", "arrowLeft"),
        ("Arrow-Left_2.0", "arrowLeft20"),
        ("chevron--down", "chevronDown"),
        ("Café • Menu", "cafMenu"),
        ("Zoom In—Out", "zoomInOut"),
        ("  Leading space", "leadingSpace"),
        ("USER/Profile (Filled)", "userProfileFilled"),
        ("Already camelCase", "alreadyCamelcase"),
        ("3D Rotate", "3dRotate"),
        ("***", ""),
        ("a", "a"),
    ],
)
def test_normalize_name_reference_table(name, expected):
    assert normalize_name(name) == expected


def test_normalize_name_without_name():
    with pytest.raises(IconNameError):
        normalize_name(None)


def test_resolve_collision():
    assert resolve_collision("home", set()) == "home"
    assert resolve_collision("home", {"home"}) == "home1"
    assert resolve_collision("home", {"home", "home1", "home2"}) == "home3"


def test_single_record_gets_base_codepoint():
    result = assign_icons([icon("Arrow Left")])
    assert [(i.identifier, i.codepoint) for i in result.icons] == [("arrowLeft", 0xE900)]


def test_no_qualifying_records_is_empty():
    result = assign_icons([icon("Hero", origin="Illustrations/Hero")])
    assert result.icons == []
    assert result.failures == []
    assert result.qualifying == 0
    assert assign_icons([]).icons == []


def test_duplicate_names_are_suffixed_in_encounter_order():
    result = assign_icons([icon("Home", url="u1"), icon("home", url="u2")])
    assert [(i.identifier, i.codepoint, i.resource_url) for i in result.icons] == [
        ("home", 0xE900, "u1"),
        ("home1", 0xE901, "u2"),
    ]


def test_three_way_collision_uses_increasing_suffix():
    result = assign_icons([icon("Home"), icon("HOME"), icon("Home!")])
    assert result.codepoints() == {"home": 0xE900, "home1": 0xE901, "home2": 0xE902}


def test_suffixed_name_collides_with_literal_name():
    result = assign_icons([icon("Home"), icon("Home"), icon("Home 1")])
    assert result.codepoints() == {"home": 0xE900, "home1": 0xE901, "home11": 0xE902}


def test_filtering():
    records = [
        icon("Hero", origin="Illustrations/foo"),
        icon("Star", url=None),
        icon("Star", origin=None),
        icon("Bell", origin="icons/lowercase"),
        icon("Bell"),
    ]
    result = assign_icons(records)
    assert result.identifiers() == ["bell"]
    assert result.qualifying == 1


def test_custom_prefix_and_base():
    records = [icon("Logo", origin="Brand/Logo"), icon("Bell")]
    result = assign_icons(records, category_prefix="Brand/", base_codepoint=0xF000)
    assert result.codepoints() == {"logo": 0xF000}


def test_failed_records_do_not_consume_codepoints():
    records = [icon("Bell"), icon(None), icon("3D Box"), icon("!!!"), icon("Star")]
    result = assign_icons(records)

    assert result.codepoints() == {"bell": 0xE900, "star": 0xE901}
    assert [(f.index, f.display_name) for f in result.failures] == [(1, None), (2, "3D Box"), (3, "!!!")]
    assert all(f.action == "skipped" for f in result.failures)
    assert result.qualifying == 5


def test_output_sorted_locale_aware_with_codepoints_unchanged():
    records = [icon("Zeta"), icon("Alpha B"), icon("Alphaa"), icon("Alpha 2")]
    result = assign_icons(records)

    assert result.identifiers() == ["alpha2", "alphaa", "alphaB", "zeta"]
    assert result.codepoints() == {"zeta": 0xE900, "alphaB": 0xE901, "alphaa": 0xE902, "alpha2": 0xE903}


def test_collation_key_orders_lower_case_first_on_ties():
    assert sorted(["homeB", "homeb", "homea"], key=collation_key) == ["homea", "homeb", "homeB"]


def test_invariants_over_generated_names():
    rng = random.Random(1234)
    words = ["home", "Home", "arrow", "Left", "right", "2", "x", "--", "•", "", "Café", "ZOOM"]
    names = [" ".join(rng.choice(words) for _ in range(rng.randint(1, 3))) for _ in range(300)]
    records = [icon(name, url=f"u{i}") for i, name in enumerate(names)]

    result = assign_icons(records)
    identifiers = result.identifiers()

    assert len(identifiers) == len(set(identifiers))
    assert all(IDENTIFIER_PATTERN.match(i) for i in identifiers)
    assert identifiers == sorted(identifiers, key=collation_key)
    assert len(result.icons) + len(result.failures) == len(records)

    # encounter order == codepoint order
    by_url = {i.resource_url: i.codepoint for i in result.icons}
    assigned = [by_url[r.resource_url] for r in records if r.resource_url in by_url]
    assert assigned == list(range(0xE900, 0xE900 + len(assigned)))


def test_keyword_names_are_suffixed():
    result = assign_icons([icon("Import"), icon("Return"), icon("Pass"), icon("Import 1")])
    assert result.codepoints() == {"import1": 0xE900, "return1": 0xE901, "pass1": 0xE902, "import11": 0xE903}

    source = constants_source(result.icons)
    compile(source, "icons.py", "exec")


def test_resolve_collision_skips_keywords():
    assert resolve_collision("class", set()) == "class1"
    assert resolve_collision("class", {"class1"}) == "class2"


def test_codepoints_stop_at_unicode_limit():
    result = assign_icons([icon("A"), icon("B"), icon("C")], base_codepoint=0x10FFFF)

    assert result.codepoints() == {"a": 0x10FFFF}
    assert [f.display_name for f in result.failures] == ["B", "C"]
