"""Smoke tests for the HelixPlot CLI."""

from __future__ import annotations

import json
from contextlib import redirect_stdout
from io import StringIO

import pytest

from plugins.helix_plot import cli


def _run_cli(args: list[str]) -> dict[str, object]:
    buffer = StringIO()
    with redirect_stdout(buffer):
        cli.main(args)
    output = buffer.getvalue().strip()
    return json.loads(output)


def test_cli_parse_and_plot(tmp_path):
    source = tmp_path / "helix.txt"
    source.write_text("x(t) = cos(t)\ny(t) = sin(t)\nz(t) = 0.1*t\ntmax = 2*pi\nnot valid\n", encoding="utf-8")

    parsed = _run_cli(["parse", str(source)])
    assert parsed["mode"] == "curve"
    assert "z(t) = (0.1 * t)" in parsed["definitions"]
    assert parsed["errors"][0]["line"] == 5

    plotted = _run_cli(["plot", str(source), "--samples", "9"])
    assert plotted["sample"]["count"] == 9
    assert plotted["t_range"][1] == pytest.approx(6.283185307179586)


def test_cli_plot_reads_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", StringIO("f(t) = t + i\n"))
    plotted = _run_cli(["plot", "-", "--mapping", "C", "--samples", "2"])
    assert plotted["mode"] == "complex"
    assert plotted["mapping"] == "C"


def test_cli_presets():
    listing = _run_cli(["presets", "list"])
    assert any(item["key"] == "surface_ripple" for item in listing["presets"])

    shown = _run_cli(["presets", "show", "surface_ripple"])
    assert shown["expected_mode"] == "surface"

    with pytest.raises(SystemExit):
        cli.main(["presets", "show", "missing"])
