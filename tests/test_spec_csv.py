import pytest

from xraml.spec_csv import (
    Csv,
    CsvFormatError,
    CsvRows,
    open_property_file,
    property_file_line_format,
    read_as_csv,
    read_property_file,
    write_property_file,
)

SAMPLE_LINES = [
    "title,,",
    "項目一覧,,",
    ",No,項目名,API参照名,必須",
    "(CSV),備考",
    ",1,Name,Name__c,〇,",
    ",2,Age,Age__c,,",
    ",3,Note,No",
    "te__c,〇,",
    ",x,Bad,Bad__c,〇,",
    ",4,Last,Last__c,〇,",
]

EXPECTED_ROWS = [
    ["", "1", "Name", "Name__c", "〇", ""],
    ["", "2", "Age", "Age__c", "", ""],
    ["", "3", "Note", "Note__c", "〇", ""],
]


def _write_sample(tmp_path, separator="\n"):
    path = tmp_path / "spec.csv"
    path.write_bytes((separator.join(SAMPLE_LINES) + separator).encode("utf-8"))
    return path


@pytest.fixture
def sample_csv(tmp_path):
    return read_as_csv(_write_sample(tmp_path))


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "data").mkdir()
    return tmp_path / "data"


def test_read_as_csv_target_columns(sample_csv):
    assert sample_csv.target_columns == [3, 4]


def test_read_as_csv_prints_target_columns(tmp_path, capsys):
    read_as_csv(_write_sample(tmp_path))
    assert capsys.readouterr().out == "target_columns: [3, 4]\n"


def test_csv_iter(sample_csv):
    rows = list(sample_csv.rows)
    assert rows == EXPECTED_ROWS
    assert all(row for row in rows)


def test_csv_rows_can_be_iterated_twice(sample_csv):
    first = list(sample_csv.rows)
    second = list(sample_csv.rows)
    assert first == EXPECTED_ROWS
    assert second == EXPECTED_ROWS


def test_csv_rows_skip_first_entry_and_non_numeric():
    rows = CsvRows([",1,skipped", ",2,kept", ",abc,dropped", "x,3,dropped", ",-4,kept"])
    assert list(rows) == [["", "2", "kept"], ["", "-4", "kept"]]


def test_csv_rows_reject_out_of_range_numbers():
    rows = CsvRows(["", ",2147483647,a", ",2147483648,b"])
    assert list(rows) == [["", "2147483647", "a"]]


def test_acquire_required(sample_csv):
    assert sample_csv.acquire_required_rows_name() == ["Name__c", "Note__c"]


def test_acquire_required_drops_last_pending_row(sample_csv):
    assert "Last__c" not in sample_csv.acquire_required_rows_name()


def test_acquire_required_with_crlf(tmp_path):
    csv = read_as_csv(_write_sample(tmp_path, "\r\n"))
    assert csv.acquire_required_rows_name() == ["Name__c", "Note__c"]


def test_filter_map(sample_csv):
    result = sample_csv.filter_map(lambda row: row[2] if row[1] == "2" else None)
    assert result == ["Age"]


def test_read_as_csv_without_marker(tmp_path):
    path = tmp_path / "plain.csv"
    path.write_text("a,b\n,1,c\n", encoding="utf-8")
    with pytest.raises(CsvFormatError):
        read_as_csv(path)


def test_read_as_csv_line_without_comma(tmp_path):
    path = tmp_path / "broken.csv"
    path.write_text("項目一覧\nx,API参照名,CSV\njunk\n,1,a\n", encoding="utf-8")
    with pytest.raises(CsvFormatError):
        read_as_csv(path)


def test_read_as_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_as_csv(tmp_path / "missing.csv")


def test_property_file_line_format():
    assert property_file_line_format("Name__c", None) == "Name__c,"
    assert property_file_line_format("Name__c", "XXX") == "Name__c,XXX"
    assert property_file_line_format("Count__c", 0) == "Count__c,0"


def test_update_content_header_only(sample_csv):
    assert (
        sample_csv.update_property_file_content("name,example")
        == "name,example\nName__c,\nNote__c,"
    )


def test_update_content_keeps_existing(sample_csv):
    result = sample_csv.update_property_file_content("name,example\nName__c,foo")
    assert result == "name,example\nName__c,foo\nNote__c,"


def test_update_content_empty(sample_csv):
    assert sample_csv.update_property_file_content("") == "\nName__c,\nNote__c,"


def test_open_pfile(data_dir):
    with open_property_file(True, True) as handle:
        assert handle.readable() and handle.writable()
    with open_property_file(False, True) as handle:
        assert handle.writable() and not handle.readable()
    with open_property_file(True, False) as handle:
        assert handle.readable() and not handle.writable()
    assert (data_dir / "property.csv").exists()


def test_open_pfile_with_invalid_argument():
    with pytest.raises(ValueError):
        open_property_file(False, False)


def test_open_pfile_read_missing(data_dir):
    with pytest.raises(FileNotFoundError):
        open_property_file(True, False)


def test_property_file_round_trip(data_dir):
    write_property_file("name,example\nA,1")
    assert read_property_file() == "name,example\nA,1"


def test_update_property_file(data_dir, sample_csv):
    (data_dir / "property.csv").write_text("name,example", encoding="utf-8")
    result = sample_csv.update_property_file()
    assert result == "name,example\nName__c,\nNote__c,"
    assert read_property_file() == result


def test_update_property_file_missing(data_dir):
    csv = Csv(rows=CsvRows(["", ",1,A,A__c,〇"]), target_columns=[3, 4])
    with pytest.raises(FileNotFoundError):
        csv.update_property_file()