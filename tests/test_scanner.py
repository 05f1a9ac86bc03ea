from swiftui_tree.scanner import (
    find_matching_delimiter, is_word_at, mask_literals, read_balanced, skip_trivia, split_top_level,
)


def test_matches_nested_braces():
    assert find_matching_delimiter("{ a { b } }", 0) == 10
    assert find_matching_delimiter("{ a { b } }", 4) == 8


def test_structural_chars_inside_literals_are_ignored():
    samples = [
        '{ Text("}") }',
        '{ "a\\"}" }',
        '{ """\n } \n""" }',
        '{ // }\n }',
        '{ /* } */ }',
    ]
    for text in samples:
        assert find_matching_delimiter(text, 0) == len(text) - 1, text


def test_parentheses_are_balanced_the_same_way():
    text = '(a, (b), ")")'
    assert find_matching_delimiter(text, 0) == len(text) - 1


def test_unbalanced_or_non_opener_reports_not_found():
    assert find_matching_delimiter("{ a { b }", 0) is None
    assert find_matching_delimiter("abc", 0) is None
    assert find_matching_delimiter("{", 5) is None
    assert read_balanced("( x", 0) is None


def test_read_balanced_returns_inner_text_and_end():
    inner, end = read_balanced("VStack { Text() } .padding()", 7)
    assert inner == " Text() "
    assert end == 16


def test_mask_literals_keeps_length_and_newlines():
    text = 'a "x{" // y {\nb /* { */ c'
    masked = mask_literals(text)
    assert len(masked) == len(text)
    assert "{" not in masked
    assert masked.index("\n") == text.index("\n")
    assert masked.startswith("a ")
    assert masked.endswith(" c")


def test_split_top_level_respects_nesting_and_strings():
    parts = split_top_level('a, f(b, c), "d,e", [1, 2], { x, y }')
    assert parts == ['a', 'f(b, c)', '"d,e"', '[1, 2]', '{ x, y }']


def test_is_word_at_checks_boundaries():
    assert is_word_at("if x", 0, "if")
    assert is_word_at("} else {", 2, "else")
    assert not is_word_at("iffy", 0, "if")
    assert not is_word_at("xif", 1, "if")


def test_skip_trivia_skips_comments_and_whitespace():
    text = "  // c\n  /* d */ x"
    assert text[skip_trivia(text, 0)] == "x"
