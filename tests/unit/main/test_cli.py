from __future__ import annotations

import json

import pytest

from ar_forecast.main.cli import build_parser, main

CSV = """timestamp,open,high,low,close,volume
2024-01-01,100.0,101.0,97.0,98.0,1000
2024-01-02,102.0,103.0,99.0,100.0,1200
2024-01-03,101.0,102.0,98.0,99.0,1500
2024-01-04,105.0,106.0,102.0,103.0,900
2024-01-05,107.0,108.0,103.0,104.0,1100
"""

MODEL = {"p": 3, "sigma2": 0.25, "mean_diff_oc": 2.5, "ar.L1": -0.5, "ar.L2": -0.3, "ar.L3": -0.2}


@pytest.fixture()
def data_dirs(tmp_path, monkeypatch):
    models = tmp_path / "models"
    prices = tmp_path / "prices"
    models.mkdir()
    prices.mkdir()
    (models / "AAPL_ar_model_20240101.json").write_text(json.dumps(MODEL))
    (prices / "AAPL.csv").write_text(CSV)
    monkeypatch.setenv("FORECAST_MODELS_DIR", str(models))
    monkeypatch.setenv("FORECAST_PRICES_DIR", str(prices))
    monkeypatch.delenv("FORECAST_INSTRUMENTS", raising=False)
    return tmp_path


def test_parser_reads_options() -> None:
    args = build_parser().parse_args(
        ["-i", "AAPL", "-i", "MSFT", "--as-of", "2024-01-05", "--details"]
    )

    assert args.instruments == ["AAPL", "MSFT"]
    assert args.as_of.isoformat() == "2024-01-05"
    assert args.details is True
    assert args.model_version is None


def test_main_prints_single_forecast(data_dirs, capsys) -> None:
    exit_code = main(["--instrument", "AAPL", "--as-of", "2024-01-05"])

    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert exit_code == 0
    assert payload["instrument_id"] == "AAPL"
    assert payload["metrics"]["model_version"] == "20240101"
    assert payload["expected_return"] == pytest.approx(7.0 / 107.0)
    assert "forecast.completed" in captured.err


def test_main_returns_error_for_unknown_instrument(data_dirs) -> None:
    assert main(["--instrument", "MSFT", "--as-of", "2024-01-05"]) == 1


def test_main_batch_reports_failures(data_dirs, capsys) -> None:
    exit_code = main(["-i", "AAPL", "-i", "MSFT", "--as-of", "2024-01-05"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["has_critical_errors"] is True
    assert payload["statuses"] == {"AAPL": "success", "MSFT": "failed"}


def test_main_batch_applies_model_version(data_dirs, capsys) -> None:
    exit_code = main(
        [
            "-i",
            "AAPL",
            "-i",
            "MSFT",
            "--model-version",
            "19990101",
            "--as-of",
            "2024-01-05",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["results"] == []
    assert "19990101" in payload["errors"]["AAPL"]


def test_main_without_instruments(data_dirs) -> None:
    assert main([]) == 2
