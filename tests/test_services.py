# -*- coding: utf-8 -*-
"""Unit tests for loading the site context."""

from types import MappingProxyType

import pytest

from web.services import SiteContext, SiteLoadError, load_site_context, parse_records


def _write_site(root, data='[{"id": 0}]'):
    templates = root / "templates"
    templates.mkdir()
    for name in ("template-overview.html", "template-card.html", "template-product.html"):
        (templates / name).write_text(f"<!-- {name} -->", encoding="utf-8")
    data_file = root / "data.json"
    data_file.write_text(data, encoding="utf-8")
    return templates, data_file


def test_load_site_context(tmp_path):
    templates, data_file = _write_site(tmp_path, '[{"id": 0, "b": 1}, {"id": 1, "a": 2}]')
    context = load_site_context(templates, data_file)

    assert context.overview_template == "<!-- template-overview.html -->"
    assert [record["id"] for record in context.records] == [0, 1]
    assert context.raw_json.encode("utf-8") == data_file.read_bytes()


def test_records_are_read_only(small_context):
    record = small_context.records[0]
    assert isinstance(record, MappingProxyType)
    with pytest.raises(TypeError):
        record["name"] = "changed"


def test_context_is_frozen(small_context):
    with pytest.raises(AttributeError):
        small_context.raw_json = "[]"


def test_missing_template_is_fatal(tmp_path):
    templates, data_file = _write_site(tmp_path)
    (templates / "template-card.html").unlink()

    with pytest.raises(SiteLoadError) as exc_info:
        load_site_context(templates, data_file)
    assert exc_info.value.path.name == "template-card.html"


def test_missing_data_is_fatal(tmp_path):
    templates, data_file = _write_site(tmp_path)
    data_file.unlink()

    with pytest.raises(SiteLoadError):
        load_site_context(templates, data_file)


@pytest.mark.parametrize("raw", ["{not json", '{"id": 0}', "[1, 2]", '[{"id": 0}, "x"]'])
def test_malformed_data_rejected(raw, tmp_path):
    with pytest.raises(SiteLoadError):
        parse_records(raw, tmp_path / "data.json")


def test_build_keeps_raw_text_verbatim():
    raw = '[ {"id":0,   "name":"x"} ]\n'
    context = SiteContext.build("", "", "", raw)
    assert context.raw_json == raw


def test_crlf_data_file_kept_verbatim(tmp_path):
    templates, data_file = _write_site(tmp_path)
    data_file.write_bytes(b'[\r\n  {"id": 0}\r\n]\r\n')

    context = load_site_context(templates, data_file)
    assert context.raw_json.encode("utf-8") == data_file.read_bytes()
    assert context.records[0]["id"] == 0


def test_invalid_utf8_is_fatal(tmp_path):
    templates, data_file = _write_site(tmp_path)
    data_file.write_bytes(b'[{"id": 0, "n": "\xff"}]')

    with pytest.raises(SiteLoadError) as exc_info:
        load_site_context(templates, data_file)
    assert exc_info.value.path == data_file
