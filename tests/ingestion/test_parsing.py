import io

from contact_csv.ingestion.parsing import detect_delimiter, find_header, is_blank_row, looks_like_header, split_line


def _numbered(text):
    return iter(enumerate(text.splitlines(), start=1))


def test_split_line_plain_cells():
    assert split_line("a,b,c") == ["a", "b", "c"]


def test_split_line_keeps_delimiter_inside_quotes():
    assert split_line('Ada,"12, Analytical Way",Investor') == ["Ada", "12, Analytical Way", "Investor"]


def test_split_line_doubled_quote_is_literal():
    assert split_line('x,"say ""hi""",y') == ["x", 'say "hi"', "y"]


def test_split_line_strips_trailing_carriage_return():
    assert split_line("a,b\r") == ["a", "b"]


def test_split_line_empty_line_yields_single_empty_cell():
    assert split_line("") == [""]
    assert split_line(None) == [""]


def test_split_line_trailing_delimiter_gives_empty_cell():
    assert split_line("a,b,") == ["a", "b", ""]


def test_split_line_tolerates_unbalanced_quote():
    assert split_line('a,"never closed,b') == ["a", "never closed,b"]


def test_split_line_with_other_delimiters():
    assert split_line("a;b,c;d", ";") == ["a", "b,c", "d"]
    assert split_line("a\tb\tc", "\t") == ["a", "b", "c"]


def test_detect_delimiter_prefers_majority():
    assert detect_delimiter("a,b,c,d\te") == ","
    assert detect_delimiter("a;b;c,d") == ";"
    assert detect_delimiter("a\tb\tc;d") == "\t"


def test_detect_delimiter_ties_default_to_comma():
    assert detect_delimiter("a\tb,c") == ","
    assert detect_delimiter("no delimiters here") == ","


def test_looks_like_header_is_case_and_order_insensitive():
    assert looks_like_header(["EMAIL", " name ", "Address", "phone", "Role", "Tags"])
    assert not looks_like_header(["Name", "Email", "Address", "Phone"])


def test_find_header_skips_preamble_and_blank_lines():
    text = "Quarterly contact dump\n\nExported by CRM,,\nName,Email,Address,Phone,Role,Tags\nAda,a@b.co,x,123,Lead,\n"
    lines = _numbered(text)

    header = find_header(lines)

    assert header is not None
    assert header.line_number == 4
    assert header.delimiter == ","
    assert header.cells == ["Name", "Email", "Address", "Phone", "Role", "Tags"]
    # The iterator is left just after the header row.
    assert next(lines) == (5, "Ada,a@b.co,x,123,Lead,")


def test_find_header_strips_byte_order_mark_and_detects_semicolons():
    header = find_header(_numbered("\ufeffname;phone;email;address;role\n"))

    assert header is not None
    assert header.delimiter == ";"
    assert header.cells[0] == "name"


def test_find_header_returns_none_without_header():
    assert find_header(_numbered("id,value\n1,2\n")) is None
    assert find_header(iter([])) is None


def test_is_blank_row():
    assert is_blank_row(["", "  ", ""])
    assert not is_blank_row(["", "x"])


def test_find_header_accepts_stream_lines():
    stream = io.StringIO("Name\tPhone\tEmail\tAddress\tRole\n")
    header = find_header(enumerate((line.rstrip("\n") for line in stream), start=1))

    assert header is not None
    assert header.delimiter == "\t"
