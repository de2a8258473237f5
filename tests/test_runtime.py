import pytest

from devchain.runtime import is_supported, version_report


@pytest.mark.parametrize("v,expected", [((3, 8, 18), False), ((3, 9, 0), True), ((3, 12, 4), True),
                                        ((3, 14, 0), True), ((3, 15, 0), False), ((2, 7, 18), False)])
def test_supported_range(v, expected):
    assert is_supported(v) is expected


def test_report_lines_for_recommended_release():
    ok, lines = version_report((3, 12, 1))
    assert ok is True
    assert "current: 3.12" in lines
    assert any("recommended" in line for line in lines)


def test_report_hints_direction():
    ok, lines = version_report((3, 15, 0))
    assert ok is False
    assert any(line.startswith("too new") for line in lines)
    ok, lines = version_report((3, 7, 9))
    assert ok is False
    assert any(line.startswith("too old") for line in lines)


def test_defaults_to_running_interpreter():
    ok, _ = version_report()
    assert ok is is_supported()
