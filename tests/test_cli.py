import pytest
from click.testing import CliRunner
from conftest import FAULT_XML, fake_response

from check_vat import main

ENV = {"VIES_RATE_LIMIT_SECONDS": "0", "VIES_ENDPOINT": ""}


@pytest.fixture
def runner():
    return CliRunner()


def test__cli__valid_number(runner, mock_post, mock_sleep):
    result = runner.invoke(main, ["NL123456789B01"], env=ENV)

    assert result.exit_code == 0
    assert "Acme Corp B.V." in result.output
    assert "KERKSTRAAT 001234" in result.output
    assert "1234AB AMSTERDAM" in result.output
    mock_sleep.assert_called_once_with(0.0)


def test__cli__raw(runner, mock_post, mock_sleep):
    result = runner.invoke(main, ["NL123456789B01", "--raw"], env=ENV)

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "NL123456789B01\t2015-03-09+01:00\ttrue\tAcme Corp B.V.\t"
        "KERKSTRAAT 001234 1234AB AMSTERDAM\t"
    ]


def test__cli__fault_exits_nonzero(runner, mock_post, mock_sleep):
    mock_post.return_value = fake_response(text=FAULT_XML)

    result = runner.invoke(main, ["XX1", "--raw"], env=ENV)

    assert result.exit_code == 1
    assert result.output.splitlines() == ["XX1\t\tfalse\t\t\tINVALID_INPUT"]


def test__cli__file(runner, mock_post, mock_sleep, tmp_path):
    vat_file = tmp_path / "vat.txt"
    vat_file.write_text("# customers\nNL123456789B01\n\nBE0123456789\n", encoding="utf-8")

    result = runner.invoke(main, ["--file", str(vat_file), "--raw"], env=ENV)

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert [line.split("\t")[0] for line in lines] == ["NL123456789B01", "BE0123456789"]
    assert mock_post.call_count == 2


def test__cli__input_error_is_printed(runner, mock_post, mock_sleep):
    result = runner.invoke(main, ["N"], env=ENV)

    assert result.exit_code == 1
    assert "Invalid VAT number: too short" in result.output
    mock_post.assert_not_called()


def test__cli__no_input(runner):
    result = runner.invoke(main, [], env=ENV)

    assert result.exit_code == 2
    assert "at least one VAT_NUMBER" in result.output


def test__cli__bad_rate_limit_env(runner, mock_post):
    result = runner.invoke(main, ["NL123456789B01"], env={"VIES_RATE_LIMIT_SECONDS": "soon"})

    assert result.exit_code == 2
    mock_post.assert_not_called()


def test__cli__endpoint_from_env(runner, mock_post, mock_sleep):
    env = {"VIES_ENDPOINT": "http://localhost:8080/vies", "VIES_RATE_LIMIT_SECONDS": "0"}

    result = runner.invoke(main, ["NL123456789B01"], env=env)

    assert result.exit_code == 0
    assert mock_post.call_args[0] == ("http://localhost:8080/vies",)
