import io

import pytest

from contact_csv.ingestion.errors import HeaderNotFoundError, SourceUnreadableError
from contact_csv.ingestion.loaders import import_records, read_records
from contact_csv.ingestion.models import Severity
from contact_csv.models import ContactRecord, Role, Tag
from contact_csv.store import InMemoryContactStore

HEADER = "Name,Phone,Email,Address,Role,Tags,Cadence\n"


def _write(tmp_path, text, name="contacts.csv", encoding="utf-8"):
    path = tmp_path / name
    path.write_text(text, encoding=encoding)
    return path


def test_import_tolerates_malformed_rows(tmp_path):
    rows = []
    for index in range(10):
        name = "" if index in (3, 7) else f"Person {index}"
        rows.append(f"{name},9000000{index},p{index}@example.com,{index} Main Street,Lead,,\n")
    path = _write(tmp_path, HEADER + "".join(rows))

    result = import_records(path)

    assert result.summary.imported == 8
    assert result.summary.malformed == 2
    assert result.summary.duplicate == 0
    assert len(result.records) == 8
    error_lines = [d.line for d in result.errors()]
    # Header is line 1, so data row N sits on line N + 2.
    assert error_lines == [5, 9]


def test_import_finds_header_below_preamble(tmp_path):
    text = (
        "ACME CRM export\n"
        "\n"
        "Generated on 2024-03-01,,,\n"
        "Name,Email,Address,Phone,Role,Tags\n"
        'Ada Lovelace,ada@example.com,"12, Analytical Way",91234567,2,"VIP!!, -- , Key Client"\n'
    )
    path = _write(tmp_path, text)

    result = import_records(path)

    assert result.header_line == 4
    assert result.delimiter == ","
    (record,) = result.records
    assert record.address == "12, Analytical Way"
    assert record.role is Role.PARTNER
    assert record.tags == {Tag("vip"), Tag("key_client")}
    assert [d.line for d in result.warnings()] == [5]


def test_import_detects_semicolon_and_tab_delimiters(tmp_path):
    semicolons = _write(
        tmp_path,
        "name;phone;email;address;role\nAda Lovelace;91234567;ada@example.com;1, Main St;customer\n",
        name="semi.csv",
    )
    tabs = _write(
        tmp_path,
        "Name\tPhone\tEmail\tAddress\tRole\nAda Lovelace\t91234567\tada@example.com\t1; Main St\tLead\n",
        name="tabs.tsv",
    )

    semi_result = import_records(semicolons)
    tab_result = import_records(tabs)

    assert semi_result.delimiter == ";"
    assert semi_result.records[0].address == "1, Main St"
    assert semi_result.records[0].role is Role.CUSTOMER
    assert tab_result.delimiter == "\t"
    assert tab_result.records[0].address == "1; Main St"


def test_import_handles_bom_and_crlf_line_endings(tmp_path):
    path = tmp_path / "windows.csv"
    path.write_bytes(
        "\ufeffName,Phone,Email,Address,Role\r\n\r\nAda Lovelace,91234567,ada@example.com,1 Main St,Investor\r\n".encode(
            "utf-8"
        )
    )

    result = import_records(path)

    assert result.summary.imported == 1
    assert result.records[0].role is Role.INVESTOR


def test_import_skips_blank_and_empty_cell_rows(tmp_path):
    text = HEADER + "\n,,,,,,\n   \nAda Lovelace,91234567,ada@example.com,1 Main St,Lead,,\n"
    result = import_records(_write(tmp_path, text))

    assert result.summary.imported == 1
    assert result.summary.malformed == 0
    assert result.diagnostics == []


def test_import_excludes_existing_duplicates():
    existing = ContactRecord(
        name="Ada Lovelace",
        phone="91234567",
        email="ada@example.com",
        address="1 Main St",
        role=Role.LEAD,
    )
    store = InMemoryContactStore([existing])
    source = io.StringIO(
        HEADER
        + "Ada Lovelace,91234567,ada@example.com,1 Main St,lead,,\n"
        + "Grace Hopper,98765432,grace@example.com,2 Harbour Rd,Partner,,\n"
    )

    result = import_records(source, store=store)

    assert result.summary.duplicate == 1
    assert result.summary.imported == 1
    assert [record.name for record in result.records] == ["Grace Hopper"]
    info = [d for d in result.diagnostics if d.severity is Severity.INFO]
    assert [d.line for d in info] == [2]
    assert not source.closed


def test_import_does_not_collapse_duplicates_within_one_file():
    row = "Ada Lovelace,91234567,ada@example.com,1 Main St,Lead,,\n"

    result = import_records(io.StringIO(HEADER + row + row), store=InMemoryContactStore())

    assert result.summary.imported == 2
    assert result.summary.duplicate == 0


def test_import_without_header_fails(tmp_path):
    path = _write(tmp_path, "id,value\n1,2\n")

    with pytest.raises(HeaderNotFoundError, match="header row"):
        import_records(path)


def test_import_of_missing_file_fails(tmp_path):
    with pytest.raises(SourceUnreadableError) as excinfo:
        import_records(tmp_path / "nope.csv")

    assert excinfo.value.path == tmp_path / "nope.csv"


def test_import_of_directory_fails(tmp_path):
    with pytest.raises(SourceUnreadableError):
        import_records(tmp_path)


def test_import_of_undecodable_file_fails(tmp_path):
    path = tmp_path / "binary.csv"
    path.write_bytes(b"Name,Phone,Email,Address,Role\n\xff\xfe\xfa broken\n")

    with pytest.raises(SourceUnreadableError):
        import_records(path)


def test_read_records_returns_contacts(tmp_path):
    path = _write(tmp_path, HEADER + "Ada Lovelace,91234567,ada@example.com,1 Main St,Lead,friends,every 30 days\n")

    (record,) = read_records(path)

    assert record.cadence.days == 30
    assert record.tags == {Tag("friends")}
