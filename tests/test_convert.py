import logging

from wavely.convert import map_to_xml


def test_string_value():
    assert map_to_xml({"name": "value"}) == b"<name>value</name>"


def test_scalars():
    assert map_to_xml({"a": True, "b": 3}) == b"<a>true</a><b>3</b>"
    assert map_to_xml({"f": 2.0, "g": 1.5}) == b"<f>2</f><g>1.5</g>"


def test_nested_map():
    assert map_to_xml({"outer": {"inner": "x"}}) == b"<outer><inner>x</inner></outer>"


def test_list_of_maps_repeats_element():
    out = map_to_xml({"item": [{"id": "1"}, "skipped", {"id": "2"}]})
    assert out == b"<item><id>1</id></item><item><id>2</id></item>"


def test_empty_map():
    assert map_to_xml({}) == b""


def test_unknown_type_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="wavely"):
        out = map_to_xml({"n": None})
    assert out == b""
    assert "undefined datatype" in caplog.text