"""
Tests for the search application contract
"""
import threading

import pytest

from modules.number_convert.core.bases import NumericBase
from modules.number_convert.core.config import NumberConvertSettings
from modules.number_convert.core.operations import COPY_RESULT, SearchOperation
from modules.number_convert.core.search import (
    APP_NAME,
    HandleResult,
    SearchRequest,
    SearchType,
    UnsupportedOperation,
    app_info,
    handle_result,
    parse_tag,
    result_for_id,
    search,
)


def _search(text, tag=None, **kwargs):
    return list(search(SearchRequest(searched_text=text, searched_tag=tag), **kwargs))


def test_tagged_search_returns_single_base():
    results = _search("10", "Hexadecimal")
    assert len(results) == 1
    assert results[0].target_base is NumericBase.HEXADECIMAL
    assert results[0].value == 10
    assert results[0].copy_value == "0xA"


def test_hex_tag_on_hex_input_is_identity():
    (result,) = _search("0xff", "hex")
    assert result.display_label == "0xff = 0xFF"


@pytest.mark.parametrize("tag", [None, "", "  ", APP_NAME, APP_NAME.lower()])
def test_unscoped_tags(tag):
    results = _search("0xFF", tag)
    assert [r.target_base for r in results] == [
        NumericBase.BINARY,
        NumericBase.OCTAL,
        NumericBase.DECIMAL,
    ]
    assert all(r.value == 255 for r in results)


def test_parse_tag():
    assert parse_tag(None) == (True, None)
    assert parse_tag("BINARY") == (True, frozenset({NumericBase.BINARY}))
    assert parse_tag("oct") == (True, frozenset({NumericBase.OCTAL}))
    assert parse_tag("bin, Hexadecimal") == (
        True,
        frozenset({NumericBase.BINARY, NumericBase.HEXADECIMAL}),
    )
    assert parse_tag("weather") == (False, None)
    assert parse_tag("bin,weather") == (False, None)


def test_unknown_tag_declines_without_parsing(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "modules.number_convert.core.search.detect",
        lambda text: calls.append(text),
    )
    assert _search("10", "weather") == []
    assert calls == []


@pytest.mark.parametrize("text", ["", "   ", "0x", "hello", "0x1FFFFFFFF"])
def test_rejected_text_yields_nothing(text):
    assert _search(text) == []


def test_cancelled_before_start_yields_nothing():
    cancel = threading.Event()
    cancel.set()
    assert _search("10", cancel=cancel) == []


def test_uncancelled_token_runs():
    assert len(_search("10", cancel=threading.Event())) == 3


def test_process_search_is_declined():
    request = SearchRequest(searched_text="10", search_type=SearchType.PROCESS)
    assert list(search(request)) == []


def test_settings_drive_formatting():
    settings = NumberConvertSettings(copy_hex_prefix=False, show_bin_prefix=False)
    results = {r.target_base: r for r in _search("255", settings=settings)}
    assert results[NumericBase.HEXADECIMAL].copy_value == "FF"
    assert results[NumericBase.HEXADECIMAL].display_label == "255 = 0xFF"
    assert results[NumericBase.BINARY].copy_value == "0b11111111"
    assert results[NumericBase.BINARY].display_label == "255 = 11111111"
    assert results[NumericBase.OCTAL].copy_value == "0o377"


def test_result_for_id_recomputes():
    (original,) = _search("0b101", "Decimal")
    restored = result_for_id(original.search_object_id)
    assert restored == original


@pytest.mark.parametrize("object_id", [None, "", "Decimal", "Weather:10", "Hexadecimal:zz"])
def test_result_for_id_rejects_bad_ids(object_id):
    assert result_for_id(object_id) is None


def test_copy_writes_clipboard_once():
    (result,) = _search("10", "hex")
    writes = []
    outcome = handle_result(result, COPY_RESULT, writes.append)
    assert writes == ["0xA"]
    assert outcome == HandleResult(handled=True, keep_open=False)


def test_foreign_result_is_a_contract_violation():
    writes = []
    with pytest.raises(TypeError):
        handle_result({"copy_value": "0xA"}, COPY_RESULT, writes.append)
    assert writes == []


def test_unsupported_operation_is_a_contract_violation():
    (result,) = _search("10", "hex")
    writes = []
    with pytest.raises(UnsupportedOperation) as excinfo:
        handle_result(result, SearchOperation("Open", "Open something"), writes.append)
    assert writes == []
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.operation.name == "Open"


def test_app_info():
    info = app_info()
    assert info["name"] == APP_NAME
    assert info["minimum_search_length"] == 1
    assert [tag["name"] for tag in info["tags"]] == [
        "Binary",
        "Octal",
        "Decimal",
        "Hexadecimal",
    ]
    assert info["operations"][0]["name"] == "Copy Result"
