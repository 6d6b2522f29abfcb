from unittest.mock import patch

from click.testing import CliRunner

from gridbrowser.config import load_config
from gridbrowser.main import cli


@patch("gridbrowser.main.GridBrowserApp")
def test_cli_runs_app_with_merged_config(mock_app_cls, tmp_path):
    config_path = tmp_path / "gridbrowser.config"
    config_path.write_text('theme = "nord"\ndebounce_ms = 250\n')

    result = CliRunner().invoke(cli, ["--config", str(config_path), "--debounce-ms", "100"])

    assert result.exit_code == 0, result.output
    kwargs = mock_app_cls.call_args.kwargs
    assert kwargs["debounce_ms"] == 100
    assert kwargs["theme"] == "nord"
    assert kwargs["source"] == "sample data"
    mock_app_cls.return_value.run.assert_called_once()


@patch("gridbrowser.main.GridBrowserApp")
def test_cli_reports_page_size_outside_options(mock_app_cls):
    result = CliRunner().invoke(cli, ["--page-size", "7"])

    assert result.exit_code != 0
    assert "items_per_page 7" in result.output
    mock_app_cls.assert_not_called()


@patch("gridbrowser.main.GridBrowserApp")
def test_cli_reports_bad_data_file(mock_app_cls, tmp_path):
    data_path = tmp_path / "listings.json"
    data_path.write_text("{}")

    result = CliRunner().invoke(cli, ["--data", str(data_path)])

    assert result.exit_code != 0
    assert "JSON array" in result.output


def test_configure_writes_config(tmp_path):
    config_path = tmp_path / "gridbrowser.config"
    # data file, debounce, rows per page, theme number
    answers = "\n300\n50\n3\n"

    result = CliRunner().invoke(cli, ["configure", "--config", str(config_path)], input=answers)

    assert result.exit_code == 0, result.output
    config = load_config(str(config_path))
    assert config.debounce_ms == 300
    assert config.items_per_page == 50
    assert config.theme == "dracula"
