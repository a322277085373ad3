import pytest

from contact_csv.ingestion.errors import MissingColumnsError
from contact_csv.ingestion.headers import map_header, missing_mandatory, normalise_role_cell, require_mandatory
from contact_csv.ingestion.models import Column


def test_map_header_is_case_insensitive_and_ignores_unknown_columns():
    header_map = map_header(["\ufeffNAME ", "Vendor ID", "email", "Phone", "Address", "ROLE", "tags"])

    assert header_map.index(Column.NAME) == 0
    assert header_map.index(Column.EMAIL) == 2
    assert header_map.index(Column.TAGS) == 6
    assert header_map.index(Column.CADENCE) is None
    assert len(header_map.positions) == 6


def test_map_header_first_duplicate_wins():
    header_map = map_header(["Name", "Email", "name"])

    assert header_map.index(Column.NAME) == 0


def test_header_map_cell_handles_short_rows_and_absent_columns():
    header_map = map_header(["Name", "Phone", "Tags"])

    assert header_map.cell(["Ada", "123"], Column.PHONE) == "123"
    assert header_map.cell(["Ada", "123"], Column.TAGS) == ""
    assert header_map.cell(["Ada", "123"], Column.CADENCE) == ""


def test_require_mandatory_lists_every_missing_column():
    header_map = map_header(["Name", "Phone", "Tags"])

    with pytest.raises(MissingColumnsError) as excinfo:
        require_mandatory(header_map)

    assert excinfo.value.missing == ["Role", "Address", "Email"]
    assert "Role, Address, Email" in str(excinfo.value)


def test_require_mandatory_passes_for_complete_header():
    header_map = map_header(["Name", "Role", "Address", "Phone", "Email"])

    require_mandatory(header_map)
    assert missing_mandatory(header_map) == []


@pytest.mark.parametrize(
    "cell, expected",
    [("1", "Investor"), ("2", "Partner"), (" 3 ", "Customer"), ("4", "Lead"), ("5", "5"), ("lead", "lead")],
)
def test_normalise_role_cell_expands_numeric_shortcuts(cell, expected):
    assert normalise_role_cell(cell) == expected
