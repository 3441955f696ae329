# thirdpartylib
import pytest
# projectlib
from turnip_chart.config.env import fetch_float, fetch_optional, fetch_var
from turnip_chart.utils.logging import Logger
from turnip_chart.utils.paths import validate_address


def test_fetch_var(monkeypatch):
    monkeypatch.setenv("CHART_TEST_VAR", " 720 ")
    assert fetch_var("CHART_TEST_VAR") == "720"
    monkeypatch.delenv("CHART_TEST_VAR")
    with pytest.raises(RuntimeError):
        fetch_var("CHART_TEST_VAR")


def test_fetch_optional_and_float(monkeypatch):
    monkeypatch.delenv("CHART_TEST_VAR", raising=False)
    assert fetch_optional("CHART_TEST_VAR", "fallback") == "fallback"
    assert fetch_float("CHART_TEST_VAR", 1000.0) == 1000.0
    monkeypatch.setenv("CHART_TEST_VAR", "wide")
    with pytest.raises(RuntimeError):
        fetch_float("CHART_TEST_VAR", 1000.0)


def test_logger_filters_by_verbosity(capsys):
    log = Logger(verbose=1)
    log("shown", verbosity=1)
    log("hidden", verbosity=2)
    out = capsys.readouterr().out
    assert "shown" in out
    assert "hidden" not in out


def test_logger_writes_file(tmp_path):
    with Logger(verbose=0, log_dir=tmp_path, write_log=True) as log:
        log("to file")
    assert "to file" in (tmp_path / "log.txt").read_text(encoding="utf-8")


def test_validate_address(tmp_path):
    target = validate_address(tmp_path / "chart.svg", extension=".png",
                              mode="w")
    assert target == tmp_path / "chart.png"
    with pytest.raises(NotADirectoryError):
        validate_address(tmp_path / "missing" / "chart.png", mode="w")
    with pytest.raises(FileNotFoundError):
        validate_address(tmp_path / "absent.json")


def test_validate_address_resolves_directory(tmp_path):
    target = validate_address(tmp_path, extension=".png", mode="w",
                              filename="chart.png")
    assert target == tmp_path / "chart.png"
    with pytest.raises(IsADirectoryError):
        validate_address(tmp_path, extension=".png", mode="w")


def test_logger_creates_log_directory(tmp_path):
    log = Logger(log_dir=tmp_path / "logs", write_log=True)
    log("created")
    assert log.log_path == tmp_path / "logs" / "log.txt"
    assert log.log_path.is_file()
