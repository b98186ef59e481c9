import pytest

from envlines.errors import FormatError
from envlines.parsing.line import inherited_key, parse_line, strip_inline_comment, unescape


@pytest.mark.parametrize(
    "line,key,value",
    [
        # unquoted values
        ("FOO=bar", "FOO", "bar"),
        ("FOO =bar", "FOO", "bar"),
        ("FOO= bar", "FOO", "bar"),
        # quoted values
        ('FOO="bar"', "FOO", "bar"),
        ("FOO='bar'", "FOO", "bar"),
        ('FOO="escaped\\"bar"', "FOO", 'escaped"bar'),
        ('FOO="\'d\'"', "FOO", "'d'"),
        # yaml style
        ("OPTION_A: 1", "OPTION_A", "1"),
        ("OPTION_A: Foo=bar", "OPTION_A", "Foo=bar"),
        ("OPTION_A=1:B", "OPTION_A", "1:B"),
        # export keyword
        ("export OPTION_A=2", "OPTION_A", "2"),
        ("export OPTION_B='\\n'", "OPTION_B", "\\n"),
        ("export exportFoo=2", "exportFoo", "2"),
        ("exportFOO=2", "exportFOO", "2"),
        ("export_FOO =2", "export_FOO", "2"),
        ("export.FOO= 2", "export.FOO", "2"),
        ("export\tOPTION_A=2", "OPTION_A", "2"),
        ("  export OPTION_A=2", "OPTION_A", "2"),
        ("\texport OPTION_A=2", "OPTION_A", "2"),
        # keys and values
        ('FOO="bar\\nbaz"', "FOO", "bar\nbaz"),
        ("FOO.BAR=foobar", "FOO.BAR", "foobar"),
        ("FOO=foobar=", "FOO", "foobar="),
        ("FOO=bar ", "FOO", "bar"),
        # inline comments
        ("FOO=bar # this is foo", "FOO", "bar"),
        ('FOO="bar#baz" # comment', "FOO", "bar#baz"),
        ("FOO='bar#baz' # comment", "FOO", "bar#baz"),
        ('FOO="bar#baz#bang" # comment', "FOO", "bar#baz#bang"),
        ('FOO="ba#r"', "FOO", "ba#r"),
        ("FOO='ba#r'", "FOO", "ba#r"),
        ("FOO=ba#r", "FOO", "ba#r"),
        ("FOO=#bar", "FOO", ""),
        # escapes
        ('FOO="bar\\n\\ b\\az"', "FOO", "bar\n baz"),
        ('FOO="bar\\\\\\n\\ b\\az"', "FOO", "bar\\\n baz"),
        ('FOO="bar\\\\r\\ b\\az"', "FOO", "bar\\r baz"),
        ("FOO='bar\\nbaz'", "FOO", "bar\\nbaz"),
        # lenient edge cases
        ('="value"', "", "value"),
        ('KEY="', "KEY", '"'),
        ('KEY="value', "KEY", '"value'),
        ("KEY='value", "KEY", "'value"),
        # leading whitespace
        (" KEY =value", "KEY", "value"),
        ("   KEY=value", "KEY", "value"),
        ("\tKEY=value", "KEY", "value"),
    ],
)
def test_parse_line(line, key, value):
    assert parse_line(line, {}) == (key, value)


def test_parse_line_multiline_double_quoted_value():
    assert parse_line('A="one\ntwo"', {}) == ("A", "one\ntwo")


def test_parse_line_without_separator_is_format_error():
    with pytest.raises(FormatError) as ei:
        parse_line("lol$wut", {})
    assert ei.value.line == "lol$wut"
    assert "separator" in ei.value.reason


@pytest.mark.parametrize("line", ["FOO BAR=1", "l$l=1", "a/b=2"])
def test_parse_line_rejects_invalid_keys(line):
    with pytest.raises(FormatError):
        parse_line(line, {})


def test_format_error_message_carries_line_number():
    with pytest.raises(FormatError) as ei:
        parse_line("nope", {}, lineno=7)
    assert ei.value.lineno == 7
    assert str(ei.value).startswith("line 7: ")


def test_parse_line_substitutes_from_presets_then_lookup():
    presets = {"A": "preset"}
    lookup = {"A": "external", "B": "external-b"}.get

    assert parse_line("X=$A", presets, lookup=lookup) == ("X", "preset")
    assert parse_line("X=$B", presets, lookup=lookup) == ("X", "external-b")
    assert parse_line("X=$C", presets, lookup=lookup) == ("X", "")


def test_parse_line_with_lookup_callable():
    def lookup(name):
        return "YES" if name == "ME" else None

    assert parse_line("TEST=$ME", {}, lookup=lookup) == ("TEST", "YES")


def test_single_quoted_values_are_inert():
    assert parse_line("A='$B \\n # x'", {"B": "no"}) == ("A", "$B \\n # x")


def test_inherited_key():
    assert inherited_key("FOO") == "FOO"
    assert inherited_key("  export FOO  ") == "FOO"
    assert inherited_key("FOO=1") is None
    assert inherited_key("lol$wut") is None
    assert inherited_key("INVALID LINE") is None


def test_unescape_leaves_escaped_dollar_for_expansion():
    assert unescape("a\\$b") == "a\\$b"
    assert unescape("\\\\\\n") == "\\\n"


def test_strip_inline_comment():
    assert strip_inline_comment("bar # c") == "bar"
    assert strip_inline_comment("bar\t#c") == "bar"
    assert strip_inline_comment("a#b") == "a#b"
    assert strip_inline_comment("#all") == ""
