"""Tests for the command-line entry point."""

from __future__ import annotations

import argparse
import csv

import pytest

from ruled_table_extractor import cli

HEIGHT = 842


def _quadrant_page():
    cells = [(50, 100, 60, 110), (60, 100, 70, 110), (50, 110, 60, 120), (60, 110, 70, 120)]
    rects = [[x0, HEIGHT - y1, x1, HEIGHT - y0] for x0, y0, x1, y1 in cells]
    texts = [
        {"x": 52, "y": HEIGHT - 108, "text": "a"},
        {"x": 62, "y": HEIGHT - 108, "text": "b"},
        {"x": 52, "y": HEIGHT - 118, "text": "c"},
        {"x": 62, "y": HEIGHT - 118, "text": "d<e"},
        {"x": 50, "y": HEIGHT - 300, "text": "Closing remark"},
    ]
    return {"content_height": HEIGHT, "rects": rects, "texts": texts}


def test_parse_pages():
    assert cli._parse_pages("1,3-5") == [0, 2, 3, 4]
    with pytest.raises(argparse.ArgumentTypeError):
        cli._parse_pages("0")
    with pytest.raises(argparse.ArgumentTypeError):
        cli._parse_pages("5-3")


def test_config_from_args():
    args = cli.build_parser().parse_args(["in.json", "out.html", "--tolerance", "2", "--gap", "8", "--bidirectional"])
    config = cli.config_from_args(args)
    assert (config.tolerance, config.gap_threshold, config.containment) == (2.0, 8.0, "bidirectional")


def test_main_writes_html_and_csv(page_dump, tmp_path):
    source = page_dump([_quadrant_page(), _quadrant_page()])
    output = tmp_path / "out" / "doc.html"
    csv_dir = tmp_path / "csv"

    assert cli.main([str(source), str(output), "--csv-dir", str(csv_dir), "--pages", "2"]) == 0

    markup = output.read_text(encoding="utf-8")
    assert 'data-page="2"' in markup and 'data-page="1"' not in markup
    assert "<td>d&lt;e</td>" in markup
    assert "<p>Closing remark</p>" in markup

    written = sorted(p.name for p in csv_dir.iterdir())
    assert written == ["page_002_table_00.csv"]
    with open(csv_dir / written[0], encoding="utf-8-sig", newline="") as fh:
        assert list(csv.reader(fh)) == [["a", "b"], ["c", "d<e"]]


def test_main_missing_input(tmp_path):
    assert cli.main([str(tmp_path / "absent.json"), str(tmp_path / "out.html")]) == 1


def test_main_bad_content(page_dump, tmp_path):
    source = page_dump([{"rects": []}])
    assert cli.main([str(source), str(tmp_path / "out.html")]) == 1


def test_main_reports_unexpected_errors(page_dump, tmp_path, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("PyMuPDF es requerido")

    monkeypatch.setattr(cli, "content_to_html", broken)
    source = page_dump([_quadrant_page()])
    assert cli.main([str(source), str(tmp_path / "out.html")]) == 1
