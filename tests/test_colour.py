import pytest

from asciicanvas.colour import Colour, ColourParseError, parse_colour, parse_hex, parse_rgb


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#FFFFFF", (255, 255, 255, 255)),
        ("#ffffff", (255, 255, 255, 255)),
        ("#FFFfff", (255, 255, 255, 255)),
        ("#FFF", (255, 255, 255, 255)),
        ("#fff", (255, 255, 255, 255)),
        ("#F00", (255, 0, 0, 255)),
        ("#f00", (255, 0, 0, 255)),
        ("#AA4A44", (170, 74, 68, 255)),
        ("#aa4a44", (170, 74, 68, 255)),
        ("#FFCF75", (255, 207, 117, 255)),
        ("#000", (0, 0, 0, 255)),
    ],
)
def test_parse_hex(text, expected):
    assert parse_colour(text) == Colour(*expected)


def test_shorthand_duplicates_each_nibble():
    for digit in "0123456789abcdef":
        nibble = int(digit, 16)
        assert parse_hex(f"#{digit}{digit}{digit}") == (nibble * 17, nibble * 17, nibble * 17, 255)


def test_long_form_reads_digit_pairs():
    assert parse_hex("#0A1B2C") == (0x0A, 0x1B, 0x2C, 255)


@pytest.mark.parametrize("text", ["#F", "#FF", "#FFFF", "#FFFFF", "#FFFFFFF"])
def test_bad_hex_length_spans_whole_string(text):
    with pytest.raises(ColourParseError) as info:
        parse_colour(text)
    assert info.value.span == (0, len(text))


def test_missing_hash_points_at_first_character():
    with pytest.raises(ColourParseError) as info:
        parse_colour("FFFFFF")
    assert info.value.span == (0, 1)


@pytest.mark.parametrize("text, index", [("#GFF", 1), ("#FgF", 2), ("#FFz", 3), ("#12345x", 6), ("#1 3456", 2)])
def test_invalid_hex_digit_spans_one_character(text, index):
    with pytest.raises(ColourParseError) as info:
        parse_colour(text)
    assert info.value.span == (index, 1)


def test_empty_string_has_no_span():
    with pytest.raises(ColourParseError) as info:
        parse_colour("")
    assert info.value.span is None
    assert str(info.value) == "empty color string"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("rgb(15, 246, 233)", (15, 246, 233, 255)),
        ("rgb(0,0,0)", (0, 0, 0, 255)),
        ("rgb( 255 ,255, 255 )", (255, 255, 255, 255)),
        ("rgba(1, 2, 3, 4)", (1, 2, 3, 4)),
        ("rgba(10,20,30,0)", (10, 20, 30, 0)),
        ("rgba(1, 2, 3)", (1, 2, 3, 255)),
    ],
)
def test_parse_rgb(text, expected):
    assert parse_colour(text) == expected


def test_out_of_range_value_spans_token():
    text = "rgb(0,12,400)"
    with pytest.raises(ColourParseError) as info:
        parse_colour(text)
    offset, length = info.value.span
    assert text[offset : offset + length] == "400"


def test_negative_value_is_out_of_range():
    text = "rgb(0, -1, 5)"
    with pytest.raises(ColourParseError) as info:
        parse_colour(text)
    offset, length = info.value.span
    assert text[offset : offset + length] == "-1"
    assert "out of range" in info.value.message


@pytest.mark.parametrize("text, token", [("rgb(a, 2, 3)", "a"), ("rgb(1,  2.5 , 3)", "2.5"), ("rgba(1, 2, 3, x1)", "x1")])
def test_non_numeric_value_spans_token(text, token):
    with pytest.raises(ColourParseError) as info:
        parse_colour(text)
    offset, length = info.value.span
    assert text[offset : offset + length] == token


def test_empty_value_points_at_its_position():
    with pytest.raises(ColourParseError) as info:
        parse_colour("rgb(1,,3)")
    assert info.value.span == (6, 0)


@pytest.mark.parametrize("text", ["rgb(1, 2)", "rgba(1, 2, 3, 4, 5)"])
def test_wrong_value_count_spans_parenthesised_content(text):
    with pytest.raises(ColourParseError) as info:
        parse_rgb(text)
    offset, length = info.value.span
    assert text[offset - 1] == "("
    assert text[offset + length] == ")"
    assert offset + length == len(text) - 1


@pytest.mark.parametrize("text", ["rgb 1, 2, 3", "rgb(1, 2, 3", "rgbx(1, 2, 3)"])
def test_malformed_rgb_syntax_spans_whole_string(text):
    with pytest.raises(ColourParseError) as info:
        parse_colour(text)
    assert info.value.span == (0, len(text))


def test_caret_sits_under_offending_span():
    with pytest.raises(ColourParseError) as info:
        parse_colour("rgb(0,12,400)")
    header, pointer = str(info.value).split("\n")
    assert header == "invalid input 'rgb(0,12,400)': value 400 for blue out of range [0, 255]"
    start = header.index("'") + 1
    assert pointer == " " * (start + 9) + "^^^"


def test_caret_for_single_hex_digit():
    with pytest.raises(ColourParseError) as info:
        parse_colour("#12G")
    header, pointer = str(info.value).split("\n")
    assert header[pointer.index("^")] == "G"
    assert pointer.count("^") == 1


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_colour("#nope")


@pytest.mark.parametrize("digits", ["1" * 5000, "9" * 5000, "1000", "-1000"])
def test_very_long_value_is_out_of_range(digits):
    text = f"rgb({digits},0,0)"
    with pytest.raises(ColourParseError) as info:
        parse_colour(text)
    assert info.value.span == (4, len(digits))
    assert "out of range" in info.value.message


def test_leading_zeros_are_not_counted():
    assert parse_colour("rgb(000000255, 0012, +7)") == (255, 12, 7, 255)
