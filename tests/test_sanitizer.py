"""Tests for text sanitization."""

from utils.sanitizer import sanitize_text, sanitize_instructions


def test_escapes_markup():
    assert sanitize_text('  <b>Salt</b>  ') == '&lt;b&gt;Salt&lt;/b&gt;'


def test_collapses_whitespace_and_drops_control_chars():
    assert sanitize_text('Brown\t\tsugar\x00\n') == 'Brown sugar'


def test_truncation_never_splits_an_entity():
    # '&amp;&amp;' is 10 characters; the second entity does not fit in 7
    assert sanitize_text('&&&', max_length=7) == '&amp;'
    assert sanitize_text('a<b', max_length=3) == 'a'


def test_truncation_keeps_plain_text_up_to_limit():
    assert sanitize_text('abcdef', max_length=4) == 'abcd'
    assert sanitize_text('a&b', max_length=6) == 'a&amp;'


def test_instructions_keep_newlines_and_truncate_cleanly():
    assert sanitize_instructions('Mix.\nBake.') == 'Mix.\nBake.'
    assert sanitize_instructions('Mix & bake', max_length=6) == 'Mix '
    assert sanitize_instructions(None) == ''
