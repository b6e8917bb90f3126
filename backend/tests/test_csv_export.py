"""
CSV export tests
"""
from services.csv_export import export_to_csv, records_to_csv


def test_headers_from_first_record_and_all_quoted():
    text = records_to_csv([
        {"id": "1", "name": "Auth System"},
        {"id": "2", "name": "Billing", "extra": "ignored"},
    ])

    assert text == '"id","name"\n"1","Auth System"\n"2","Billing"\n'


def test_quotes_and_lists():
    text = records_to_csv([{"subject": 'Say "hi", please', "tags": ["api", "dev"], "owner": None}])

    assert text.splitlines()[1] == '"Say ""hi"", please","api,dev",""'


def test_nested_dict_is_json():
    text = records_to_csv([{"meta": {"a": 1}}])

    assert text.splitlines()[1] == '"{""a"": 1}"'


def test_empty_collection_returns_none(caplog):
    assert records_to_csv([]) is None
    assert "No data to export" in caplog.text


def test_export_appends_extension(tmp_path):
    path = export_to_csv([{"id": "1"}], tmp_path / "investors")

    assert path == tmp_path / "investors.csv"
    assert path.read_text(encoding="utf-8") == '"id"\n"1"\n'


def test_export_nothing_writes_no_file(tmp_path):
    assert export_to_csv([], tmp_path / "empty") is None
    assert list(tmp_path.iterdir()) == []
