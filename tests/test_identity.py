from __future__ import annotations

import pytest

from battlesearch.identity import bytes_to_id, decode_string, to_id


def test_to_id_strips_punctuation_and_case() -> None:
    assert to_id("Ann-Ika") == to_id("annika") == "annika"
    assert to_id("Bob the Builder #7") == "bobthebuilder7"


def test_to_id_drops_non_ascii_letters() -> None:
    assert to_id("Ånnika") == "nnika"


def test_to_id_of_empty_string_is_empty() -> None:
    assert to_id("") == ""
    assert to_id("!!!") == ""


@pytest.mark.parametrize("name", ["Annika", "  A n n i k a ", "ZARel!", "a_b-c.d", "", "ÉÈ42"])
def test_to_id_is_idempotent(name: str) -> None:
    assert to_id(to_id(name)) == to_id(name)


def test_decode_string_unquotes_json_strings() -> None:
    assert decode_string(b'"forfeit"') == "forfeit"
    assert decode_string(b'"caf\\u00e9"') == "café"
    assert decode_string(b"42") == "42"


def test_bytes_to_id_keeps_absence() -> None:
    assert bytes_to_id(None) is None
    assert bytes_to_id(b'"Ann-Ika"') == "annika"
