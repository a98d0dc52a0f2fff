import json
import logging

import pytest
from k8s_labels_cli import app
from pytest_mock import MockerFixture
from typer.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestLabelCommand:
    def test_valid(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["label", "honk/foo=bar"])
        assert result.exit_code == 0
        assert result.output == "honk/foo:bar\n"

    def test_empty_value(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["label", "honk/foo"])
        assert result.exit_code == 0
        assert result.output == "honk/foo:\n"

    def test_invalid(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["label", "honk/foo=bar "])
        assert result.exit_code == 1
        assert "found ' ' at 1:13, expected: end of string" in result.output


class TestLabelsCommand:
    def test_either(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["labels", "foo:bar\nexample.com/baz:qux"])
        assert result.exit_code == 0
        assert result.output == "foo:bar\nexample.com/baz:qux\n"

    def test_json(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["labels", "--format", "csv", "--json", "foo:bar,bar:baz,foo:qux"],
        )
        assert result.exit_code == 0
        assert json.loads(result.output) == {"foo": "qux", "bar": "baz"}

    def test_env(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["labels", "-f", "env", "A=b C"])
        assert result.exit_code == 0
        assert result.output == "A:b\nC:\n"

    @pytest.mark.parametrize(
        "list_format, text",
        (
            ("csv", "foo:bar baz:qux"),
            ("wsv", "foo:bar,baz:qux"),
            ("either", "foo:bar baz:qux,quux:corge"),
        ),
    )
    def test_invalid(self, runner: CliRunner, list_format: str, text: str) -> None:
        result = runner.invoke(app, ["labels", "--format", list_format, text])
        assert result.exit_code == 1
        assert "expected:" in result.output

    def test_unknown_format(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["labels", "--format", "tsv", "foo:bar"])
        assert result.exit_code != 0


class TestKeyCommand:
    def test_with_prefix(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["key", "example.com/name"])
        assert result.exit_code == 0
        assert result.output == "prefix: example.com\nname: name\n"

    def test_without_prefix(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["key", "name"])
        assert result.exit_code == 0
        assert result.output == "prefix: -\nname: name\n"

    def test_invalid(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["key", "a/b/c"])
        assert result.exit_code == 1
        assert "found '/' at 1:4" in result.output


class TestLogging:
    def test_verbose(self, runner: CliRunner, mocker: MockerFixture) -> None:
        basic_config = mocker.patch("logging.basicConfig")
        result = runner.invoke(app, ["--verbose", "key", "name"])
        assert result.exit_code == 0
        basic_config.assert_called_once_with(
            level=logging.DEBUG,
            format=mocker.ANY,
        )

    def test_quiet(self, runner: CliRunner, mocker: MockerFixture) -> None:
        basic_config = mocker.patch("logging.basicConfig")
        runner.invoke(app, ["key", "name"])
        basic_config.assert_called_once_with(
            level=logging.WARNING,
            format=mocker.ANY,
        )

    def test_rejection_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="k8s_labels"):
            result = CliRunner().invoke(app, ["key", "-"])
        assert result.exit_code == 1
        assert "match_key rejected '-'" in caplog.text
