import tkinter as tk
import pytest
from unittest.mock import patch
from birthday_display.core.config import Settings
from birthday_display.main import build_parser, main, run

def test_missing_argument_exits_with_error():
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code != 0

def test_help_exits_successfully(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])

    assert exc_info.value.code == 0
    assert "Show birthdays from csv file in window" in capsys.readouterr().out

def test_parser_reads_file_and_log_level():
    args = build_parser().parse_args(["birthdays.csv", "--log-level", "debug"])

    assert args.file == "birthdays.csv"
    assert args.log_level == "DEBUG"

def test_unknown_log_level_argument_exits_with_usage_error(write_csv, capsys):
    path = write_csv("Doe,Jane,15.03.1990,f\n")

    with patch("birthday_display.main.run") as mock_run:
        with pytest.raises(SystemExit) as exc_info:
            main([path, "--log-level", "loud"])

    assert exc_info.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
    mock_run.assert_not_called()

def test_unknown_log_level_setting_exits_with_usage_error(write_csv, monkeypatch, capsys):
    path = write_csv("Doe,Jane,15.03.1990,f\n")
    monkeypatch.setenv("LOG_LEVEL", "loud")

    with patch("birthday_display.main.run") as mock_run:
        with pytest.raises(SystemExit) as exc_info:
            main([path])

    assert exc_info.value.code == 2
    assert "LOG_LEVEL" in capsys.readouterr().err
    mock_run.assert_not_called()

def test_log_level_setting_is_case_insensitive():
    assert Settings(_env_file=None, LOG_LEVEL="warning").LOG_LEVEL == "WARNING"

def test_run_missing_file_returns_error(config, tmp_path):
    with patch("birthday_display.main.BirthdayWindow") as mock_window:
        assert run(str(tmp_path / "missing.csv"), config) == 1

    mock_window.assert_not_called()

def test_run_without_display_returns_error(config, write_csv):
    path = write_csv("Doe,Jane,15.03.1990,f\n")

    with patch("birthday_display.main.BirthdayWindow", side_effect=tk.TclError("no display")):
        assert run(path, config) == 1

def test_run_shows_window_until_closed(config, write_csv):
    path = write_csv("Doe,Jane,15.03.1990,f,https://example.com/a.png\nDoe,,15.03.1990,f\n")

    with patch("birthday_display.main.BirthdayWindow") as mock_window, \
            patch("birthday_display.main.ImageFetchWorker") as mock_worker:
        assert run(path, config) == 0

    window = mock_window.return_value
    window.render.assert_called_once()
    window.run.assert_called_once()
    assert window.every.call_count == 2
    window.on_close.assert_called_once()
    mock_worker.return_value.stop.assert_called_once()
    window.close.assert_called_once()

def test_run_cleans_up_when_start_fails(config, write_csv):
    path = write_csv("Doe,Jane,15.03.1990,f,https://example.com/a.png\n")

    with patch("birthday_display.main.BirthdayWindow") as mock_window, \
            patch("birthday_display.main.BirthdayController") as mock_controller:
        mock_controller.return_value.start.side_effect = RuntimeError("worker did not start")

        with pytest.raises(RuntimeError):
            run(path, config)

    mock_controller.return_value.close.assert_called_once()
    mock_window.return_value.close.assert_called_once()
    mock_window.return_value.run.assert_not_called()

def test_main_exits_with_run_result(write_csv):
    path = write_csv("Doe,Jane,15.03.1990,f\n")

    with patch("birthday_display.main.run", return_value=0) as mock_run:
        with pytest.raises(SystemExit) as exc_info:
            main([path])

    assert exc_info.value.code == 0
    assert mock_run.call_args.args[0] == path
