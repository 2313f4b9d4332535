import pytest

from edgebind.naming import ServerlessNaming


@pytest.mark.parametrize(
    ("function_name", "expected"),
    [
        ("router", "RouterLambdaFunction"),
        ("Router", "RouterLambdaFunction"),
        ("edge-router", "EdgeDashrouterLambdaFunction"),
        ("edge_router", "EdgeUnderscorerouterLambdaFunction"),
        ("a-b_c", "ADashbUnderscorecLambdaFunction"),
        ("viewerRequest", "ViewerRequestLambdaFunction"),
    ],
)
def test_lambda_logical_id(function_name, expected):
    assert ServerlessNaming().get_lambda_logical_id(function_name) == expected


def test_version_output_logical_id():
    naming = ServerlessNaming()

    assert naming.get_lambda_version_output_logical_id("edge-router") == (
        "EdgeDashrouterLambdaFunctionQualifiedArn"
    )


def test_role_logical_id():
    assert ServerlessNaming().get_role_logical_id() == "IamRoleLambdaExecution"
