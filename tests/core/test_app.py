# tests/core/test_app.py
import io
import json
import logging
from pathlib import Path

import pytest

from container_finder.app import main
from container_finder.core.managers.config_manager import config_manager

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures"
LISTING = str(FIXTURES / "listing_page.html")


@pytest.fixture(autouse=True)
def clean_config():
    """Zorg dat elke test met de meegeleverde settings.json start."""
    config_manager.reset()
    yield
    config_manager.reset()
    logging.getLogger("container_finder").setLevel(logging.NOTSET)


def _reports(output: str):
    decoder = json.JSONDecoder()
    reports, idx = [], 0
    output = output.strip()
    while idx < len(output):
        obj, end = decoder.raw_decode(output, idx)
        reports.append(obj)
        idx = end
        while idx < len(output) and output[idx].isspace():
            idx += 1
    return reports


def test_main_prints_result_for_file(capsys):
    code = main([LISTING, "--log-level", "WARNING"])
    captured = capsys.readouterr()

    assert code == 0
    (report,) = _reports(captured.out)
    assert report["source"] == LISTING
    assert report["result"]["selector"] == ".product-item"
    assert report["result"]["count"] == 12
    assert report["result"]["tagName"] == "DIV"


def test_main_prints_null_when_nothing_found(tmp_path, capsys):
    page = tmp_path / "empty.html"
    page.write_text("<html><body><p>Nothing to see</p></body></html>", encoding="utf-8")

    code = main([str(page), "--log-level", "WARNING"])
    (report,) = _reports(capsys.readouterr().out)

    assert code == 0
    assert report["result"] is None


def test_main_trace_output(capsys):
    code = main([LISTING, "--trace", "--log-level", "WARNING"])
    (report,) = _reports(capsys.readouterr().out)

    assert code == 0
    assert report["trace"]["classCounts"]["product-item"] == 12
    assert report["trace"]["usedFallback"] is False
    assert report["trace"]["result"]["className"] == "product-item"


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(Path(LISTING).read_text(encoding="utf-8")))
    code = main(["--log-level", "WARNING"])
    (report,) = _reports(capsys.readouterr().out)

    assert code == 0
    assert report["source"] == "-"
    assert report["result"]["count"] == 12


def test_main_continues_after_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "missing.html")
    code = main([missing, LISTING, "--log-level", "CRITICAL"])
    captured = capsys.readouterr()

    assert code == 1
    assert f"❌ Error: {missing}" in captured.err
    (report,) = _reports(captured.out)
    assert report["source"] == LISTING


def test_main_rejects_unknown_parser(capsys):
    code = main([LISTING, "--parser", "no-such-builder", "--log-level", "CRITICAL"])
    captured = capsys.readouterr()

    assert code == 1
    assert "no-such-builder" in captured.err


def test_indent_comes_from_config(capsys):
    config_manager.set_nested("output.indent", 0)
    main([LISTING, "--log-level", "WARNING"])
    out = capsys.readouterr().out
    # indent=0 still puts every key on its own line, without leading spaces
    assert '\n"source"' in out


def test_set_override_reaches_the_output(capsys):
    """--set gaat via de ConfigManager en bepaalt de inspringing van de uitvoer."""
    code = main([LISTING, "--set", "output.indent=0", "--log-level", "WARNING"])
    out = capsys.readouterr().out

    assert code == 0
    assert '\n"source"' in out
    assert config_manager.get_nested("output.indent") == 0


def test_set_override_selects_the_parser(capsys):
    code = main([LISTING, "--set", "parser.features=no-such-builder", "--log-level", "CRITICAL"])
    assert code == 1
    assert "no-such-builder" in capsys.readouterr().err


def test_malformed_override_is_reported(capsys):
    code = main([LISTING, "--set", "output.indent=wide"])
    captured = capsys.readouterr()

    assert code == 1
    assert "❌ Error: 'output.indent' expects int" in captured.err
    assert captured.out == ""


def test_show_config_prints_effective_settings(capsys):
    code = main(["--show-config", "--set", "debug.module_levels.container_finder=DEBUG", "--log-level", "WARNING"])
    shown = json.loads(capsys.readouterr().out)

    assert code == 0
    assert shown["parser"]["features"] == "html.parser"
    assert shown["debug"]["module_levels"] == {"container_finder": "DEBUG"}


def test_module_levels_from_settings_are_applied(capsys):
    main(["--show-config", "--set", "debug.module_levels.container_finder=DEBUG", "--log-level", "WARNING"])
    capsys.readouterr()
    assert logging.getLogger("container_finder").level == logging.DEBUG
    assert logging.getLogger("bs4").level == logging.ERROR
