from __future__ import annotations

import pytest

from battlesearch.errors import MalformedDocumentError
from battlesearch.extraction import BATTLE_FIELD_PATHS, FieldExtractor, parse_field_path


def test_extracts_raw_values_in_path_order() -> None:
    extractor = FieldExtractor()
    doc = b'{"endType":"forfeit","p2":"Bob","p1":"Annika","winner":"Bob","turns":12}'
    assert extractor.extract(doc) == [b'"Annika"', b'"Bob"', b'"Bob"', b'"forfeit"']


def test_missing_and_null_fields_are_absent() -> None:
    extractor = FieldExtractor()
    assert extractor.extract(b'{"p1":"Annika","winner":null}') == [b'"Annika"', None, None, None]


def test_non_string_values_keep_their_json_text() -> None:
    extractor = FieldExtractor(["$.p1", "$.turns"])
    assert extractor.extract(b'{"p1":"A","turns":[1, 2]}') == [b'"A"', b"[1,2]"]


@pytest.mark.parametrize("doc", [b"not json", b"", b'{"p1": "A"'])
def test_invalid_json_is_malformed(doc: bytes) -> None:
    with pytest.raises(MalformedDocumentError, match="Invalid JSON"):
        FieldExtractor().extract(doc)


def test_non_object_document_is_malformed() -> None:
    with pytest.raises(MalformedDocumentError, match="JSON object"):
        FieldExtractor().extract(b'["p1", "p2"]')


@pytest.mark.parametrize("path", ["p1", "$.", "$.a.b", "$.a[0]"])
def test_unsupported_paths_are_rejected(path: str) -> None:
    with pytest.raises(ValueError):
        parse_field_path(path)


def test_default_paths_cover_battle_fields() -> None:
    assert [parse_field_path(path) for path in BATTLE_FIELD_PATHS] == ["p1", "p2", "winner", "endType"]


def test_shape_learning_does_not_change_results() -> None:
    extractor = FieldExtractor(training_rounds=2)
    same = b'{"p1":"A","p2":"B","winner":"A","endType":"normal"}'
    reordered = b'{"winner":"A","p2":"B","p1":"A","endType":"normal"}'

    first = extractor.extract(same)
    extractor.extract(same)
    assert extractor.trained
    extractor.extract(same)
    assert extractor.extract(reordered) == first

    assert extractor.documents == 4
    assert extractor.shape_hits == 1


def test_negative_training_rounds_rejected() -> None:
    with pytest.raises(ValueError):
        FieldExtractor(training_rounds=-1)


def test_lone_surrogate_in_field_is_kept_lossily() -> None:
    values = FieldExtractor().extract(b'{"p1":"Annika\\ud83d","p2":"Bob"}')
    assert values[0] == '"Annika\ud83d"'.encode("utf-8", errors="surrogatepass")
    assert values[1] == b'"Bob"'


def test_deeply_nested_document_is_malformed() -> None:
    depth = 200_000
    doc = b'{"p1":"A","p2":"B","junk":' + b"[" * depth + b"]" * depth + b"}"
    with pytest.raises(MalformedDocumentError):
        FieldExtractor().extract(doc)


def test_invalid_utf8_outside_extracted_fields_is_tolerated() -> None:
    doc = b'{"p1":"Annika","p2":"Bob","note":"\xff\xfe"}'
    assert FieldExtractor().extract(doc)[:2] == [b'"Annika"', b'"Bob"']


def test_utf8_bom_is_accepted() -> None:
    assert FieldExtractor().extract(b'\xef\xbb\xbf{"p1":"A"}')[0] == b'"A"'
