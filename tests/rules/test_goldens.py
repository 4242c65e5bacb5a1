import pytest

from stylefix.engine import Linter
from tests.infrastructure import assert_golden_match, make_linter, read_golden


@pytest.mark.parametrize("name, ext, linter_factory", [
    ("component", "tsx", Linter),
    ("compose", "ts", make_linter),
])
def test_fully_fixed_output(name, ext, linter_factory):
    linter = linter_factory()
    result = linter.fix_text(read_golden(name, ext), ext)
    assert result.remaining == []
    assert_golden_match(result.output, name, ext)


def test_expected_files_are_clean():
    assert Linter().lint_text(read_golden("component.expected", "tsx"), "tsx") == []
    assert make_linter().lint_text(read_golden("compose.expected", "ts"), "ts") == []
