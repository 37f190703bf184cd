from contractsmith.core.format_lines import BLANK, format_lines, space_between


def test_nesting_adds_one_indent_per_level():
    assert format_lines("a", ["b", ["c"]], "d") == "a\n    b\n        c\nd\n"


def test_blank_lines_are_collapsed_and_trimmed():
    text = format_lines(BLANK, "a", BLANK, BLANK, "", "b", BLANK)

    assert text == "a\n\nb\n"


def test_empty_input_renders_single_newline():
    assert format_lines() == "\n"


def test_space_between_skips_empty_groups():
    assert space_between(["a"], [], ["b", "c"]) == ["a", BLANK, "b", "c"]
    assert space_between([], []) == []
