import pytest

from stylefix.range_edits import RangeEditor, TextRange, ranges_overlap


def test_multiple_edits_reverse_order_and_stats():
    # ASCII text: byte counts equal char counts
    text = "abcdef\n123456\nXYZ\n"
    ed = RangeEditor(text)

    # Replace 'cde' with 'C' (shorter)
    ed.add_replacement(2, 5, "C", edit_type="replace_cde")
    # Insert prefix at BOF
    ed.add_insertion(0, ">>> ", edit_type="insert_prefix")
    # Delete '456\n'
    start_del = text.index("456")
    ed.add_deletion(start_del, start_del + len("456\n"), edit_type="delete_tail")

    result, stats = ed.apply_edits()

    assert result == ">>> abCf\n123XYZ\n"
    assert stats["edits_applied"] == 3
    # len('cde') + len('456\n')
    assert stats["bytes_removed"] == 7
    # len('C') + len('>>> ')
    assert stats["bytes_added"] == 5
    assert stats["bytes_saved"] == 2


def test_overlapping_edits_first_wins():
    ed = RangeEditor("hello world")
    assert ed.add_replacement(0, 5, "hi", edit_type="first")
    assert not ed.add_deletion(0, 4, edit_type="second_overlapping")

    result, stats = ed.apply_edits()
    assert result == "hi world"
    assert stats["edits_applied"] == 1


def test_fix_is_accepted_or_rejected_as_a_whole():
    text = "[{a: 1}, {b: 2}]"
    ed = RangeEditor(text)
    assert ed.add_fix([(0, 1, ""), (15, 16, "")], edit_type="flatten")
    # second operation collides with the accepted ']' removal
    assert not ed.add_fix([(6, 7, ""), (15, 16, "")], edit_type="merge")

    result, stats = ed.apply_edits()
    assert result == "{a: 1}, {b: 2}"
    assert stats["edits_applied"] == 2


def test_touching_edits_are_both_applied():
    ed = RangeEditor("compose(a)")
    assert ed.add_deletion(0, 7)
    assert ed.add_replacement(7, 8, "[")
    assert ed.add_replacement(9, 10, "]")
    assert ed.apply_edits()[0] == "[a]"


def test_unicode_text():
    text = "ünï(x)"
    ed = RangeEditor(text)
    ed.add_deletion(0, 4)
    ed.add_deletion(5, 6)
    result, stats = ed.apply_edits()
    assert result == "x"
    # 'ü' and 'ï' take two bytes each
    assert stats["bytes_removed"] == 7


def test_no_edits():
    ed = RangeEditor("same")
    assert ed.apply_edits() == ("same", {"edits_applied": 0, "bytes_removed": 0, "bytes_added": 0, "bytes_saved": 0})


def test_out_of_bounds_edit_fails_validation():
    ed = RangeEditor("abc")
    ed.add_deletion(1, 10)
    assert ed.validate_edits()
    with pytest.raises(ValueError):
        ed.apply_edits()


class TestTextRange:

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            TextRange(5, 2)

    def test_overlap_rules(self):
        assert TextRange(0, 5).overlaps(TextRange(4, 6))
        assert not TextRange(0, 5).overlaps(TextRange(5, 6))
        # insertion points
        assert TextRange(3, 3).overlaps(TextRange(0, 5))
        assert not TextRange(5, 5).overlaps(TextRange(0, 5))
        assert TextRange(2, 2).overlaps(TextRange(2, 2))

    def test_contains_and_length(self):
        outer = TextRange(0, 10)
        assert outer.contains(TextRange(2, 3))
        assert not TextRange(2, 3).contains(outer)
        assert outer.length == 10
        assert TextRange(4, 4).is_empty

    def test_ranges_overlap(self):
        assert not ranges_overlap([TextRange(0, 1), TextRange(1, 2), TextRange(5, 5)])
        assert ranges_overlap([TextRange(0, 3), TextRange(5, 6), TextRange(2, 4)])
