import json

import pytest
from click.testing import CliRunner

from edgebind.cli import cli

from ..templates import DISTRIBUTION_ID, FUNCTION_ID, OUTPUT_ID, ROLE_ID, build_template


@pytest.fixture(autouse=True)
def no_debug(monkeypatch):
    monkeypatch.delenv("EDGEBIND_DEBUG", raising=False)


@pytest.fixture
def runner():
    return CliRunner()


def _write(path, data) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


@pytest.fixture
def template_file(tmp_path):
    return _write(tmp_path / "cloudformation-template-update-stack.json", build_template())


def test_transform_writes_output_file(runner, tmp_path, template_file):
    functions = _write(
        tmp_path / "functions.json",
        {
            "functions": {
                "router": {
                    "handler": "handler.main",
                    "edgeAssociation": {
                        "eventType": "viewer-request",
                        "distribution": DISTRIBUTION_ID,
                    },
                }
            }
        },
    )
    output = tmp_path / "out.json"

    result = runner.invoke(
        cli, ["transform", template_file, "--functions", functions, "--output", str(output)]
    )

    assert result.exit_code == 0, result.output
    transformed = json.loads(output.read_text(encoding="utf-8"))
    behavior = transformed["Resources"][DISTRIBUTION_ID]["Properties"]["DistributionConfig"][
        "DefaultCacheBehavior"
    ]
    assert behavior["LambdaFunctionAssociations"] == [
        {"EventType": "viewer-request", "LambdaFunctionARN": {"Ref": "RouterLambdaVersionAbc123"}}
    ]
    trust = transformed["Resources"][ROLE_ID]["Properties"]["AssumeRolePolicyDocument"]
    assert "edgelambda.amazonaws.com" in trust["Statement"][0]["Principal"]["Service"]


def test_transform_stage_is_used_for_exports(runner, tmp_path, template_file):
    functions = _write(
        tmp_path / "functions.json",
        {"router": {"edgeAssociation": {"eventType": "origin-request"}}},
    )
    output = tmp_path / "out.json"

    result = runner.invoke(
        cli,
        [
            "transform",
            template_file,
            "-f",
            functions,
            "--stage",
            "prod",
            "-o",
            str(output),
        ],
    )

    assert result.exit_code == 0, result.output
    transformed = json.loads(output.read_text(encoding="utf-8"))
    assert transformed["Outputs"][OUTPUT_ID]["Export"] == {"Name": f"{FUNCTION_ID}:prod-ARN"}


def test_transform_configuration_error_exits_1(runner, tmp_path, template_file):
    functions = _write(
        tmp_path / "functions.json", {"router": {"edgeAssociation": {"eventType": "bad-event"}}}
    )
    output = tmp_path / "out.json"

    result = runner.invoke(cli, ["transform", template_file, "-f", functions, "-o", str(output)])

    assert result.exit_code == 1
    assert not output.exists()


def test_transform_invalid_json_exits_1(runner, tmp_path, template_file):
    functions = tmp_path / "functions.json"
    functions.write_text("{not json", encoding="utf-8")

    result = runner.invoke(cli, ["transform", template_file, "-f", str(functions)])

    assert result.exit_code == 1


def test_transform_debug_reraises(runner, tmp_path, template_file, monkeypatch):
    monkeypatch.setenv("EDGEBIND_DEBUG", "1")
    functions = _write(
        tmp_path / "functions.json", {"router": {"edgeAssociation": {"eventType": "bad-event"}}}
    )

    result = runner.invoke(cli, ["transform", template_file, "-f", functions])

    assert result.exit_code == 1
    assert type(result.exception).__name__ == "InvalidEventTypeError"


def test_transform_missing_template_file(runner, tmp_path):
    functions = _write(tmp_path / "functions.json", {})

    result = runner.invoke(cli, ["transform", str(tmp_path / "missing.json"), "-f", functions])

    assert result.exit_code == 2


def test_check_valid_declarations(runner, tmp_path):
    functions = _write(
        tmp_path / "functions.json",
        {
            "router": {
                "edgeAssociation": [
                    {
                        "eventType": "viewer-request",
                        "distribution": DISTRIBUTION_ID,
                        "includeBody": True,
                    },
                    {"eventType": "origin-response"},
                ]
            },
            "plain": {"handler": "plain.main"},
            "disabled": None,
        },
    )

    result = runner.invoke(cli, ["check", functions])

    assert result.exit_code == 0, result.output


def test_check_invalid_declaration(runner, tmp_path):
    functions = _write(
        tmp_path / "functions.json",
        {"router": {"edgeAssociation": {"eventType": "origin-response", "includeBody": True}}},
    )

    result = runner.invoke(cli, ["check", functions])

    assert result.exit_code == 1


def test_no_command_shows_help(runner):
    result = runner.invoke(cli, [])

    assert result.exit_code == 0


def test_check_path_pattern_without_distribution(runner, tmp_path, monkeypatch):
    monkeypatch.setenv("EDGEBIND_DEBUG", "1")
    functions = _write(
        tmp_path / "functions.json",
        {"router": {"edgeAssociation": {"eventType": "viewer-request", "pathPattern": "/api/*"}}},
    )

    result = runner.invoke(cli, ["check", functions])

    assert result.exit_code == 1
    assert type(result.exception).__name__ == "DistributionRequiredError"


def test_check_rejects_non_mapping_definition(runner, tmp_path, monkeypatch):
    monkeypatch.setenv("EDGEBIND_DEBUG", "1")
    functions = _write(tmp_path / "functions.json", {"router": ["viewer-request"]})

    result = runner.invoke(cli, ["check", functions])

    assert result.exit_code == 1
    assert type(result.exception).__name__ == "TemplateFormatError"
