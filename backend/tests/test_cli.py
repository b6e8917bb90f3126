"""
Command line tests (file backend in a temp directory)
"""
import json

import pytest

import cli
from config import get_settings


@pytest.fixture(autouse=True)
def local_store(tmp_path, monkeypatch):
    monkeypatch.setenv("LOCAL_STORE_BACKEND", "file")
    monkeypatch.setenv("LOCAL_STORE_PATH", str(tmp_path / "store"))
    monkeypatch.setenv("API_URL", "http://127.0.0.1:9")
    get_settings.cache_clear()
    yield tmp_path


def run(capsys, *argv):
    code = cli.main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_list_seeds_collection(capsys, local_store):
    code, out, _ = run(capsys, "list", "investors")

    assert code == 0
    assert [i["name"] for i in json.loads(out)][0] == "Sarah Ventures"
    assert (local_store / "store" / "startupos_investors.json").exists()


def test_add_update_delete(capsys):
    code, out, _ = run(capsys, "add", "tickets", '{"subject": "Printer on fire", "priority": "HIGH"}')
    assert code == 0
    ticket_id = json.loads(out)["id"]

    code, out, _ = run(capsys, "update", "tickets", ticket_id, '{"status": "RESOLVED"}')
    assert json.loads(out)["status"] == "RESOLVED"

    code, out, _ = run(capsys, "delete", "tickets", ticket_id)
    assert "Deleted 1 record(s)" in out

    _, out, _ = run(capsys, "list", "tickets")
    assert ticket_id not in [t["id"] for t in json.loads(out)]


def test_bad_input_exits_1(capsys):
    code, _, err = run(capsys, "add", "tickets", "[1, 2]")
    assert code == 1
    assert "Expected a JSON object" in err

    code, _, err = run(capsys, "list", "rockets")
    assert code == 1
    assert "Unknown collection 'rockets'" in err

    code, _, err = run(capsys, "update", "tickets", "404", '{"status": "x"}')
    assert code == 1


def test_export(capsys, local_store):
    code, out, _ = run(capsys, "export", "legal_docs", "-o", str(local_store / "docs"))

    assert code == 0
    text = (local_store / "docs.csv").read_text(encoding="utf-8")
    assert text.splitlines()[0] == '"id","title","type","status","lastModified"'


def test_link_and_entities(capsys):
    _, out, _ = run(capsys, "link", "FEATURE", "2")
    assert json.loads(out) == {"id": "2", "name": "Billing Integration", "type": "FEATURE"}

    _, out, _ = run(capsys, "link", "CAMPAIGN", "1")
    assert json.loads(out) is None

    _, out, _ = run(capsys, "entities", "GOAL")
    assert len(json.loads(out)) == 2


def test_reset_needs_confirmation(capsys):
    run(capsys, "list", "investors")

    code, _, err = run(capsys, "reset")
    assert code == 1

    code, out, _ = run(capsys, "reset", "--yes")
    assert code == 0
    assert "Removed 1 keys" in out

    _, out, _ = run(capsys, "stats")
    assert json.loads(out)["count"] == 0


def test_health_offline(capsys):
    code, out, _ = run(capsys, "health")

    assert code == 0
    assert json.loads(out)["backend"] == "OFFLINE"
