from typing import Protocol


class NamingResolver(Protocol):
    """Maps declared function names to logical ids in the compiled template."""

    def get_lambda_logical_id(self, function_name: str) -> str: ...

    def get_lambda_version_output_logical_id(self, function_name: str) -> str: ...

    def get_role_logical_id(self) -> str: ...


class ServerlessNaming:
    """Logical ids as generated by the Serverless Framework AWS provider.

    >>> naming = ServerlessNaming()
    >>> naming.get_lambda_logical_id("edge-handler_v2")
    'EdgeDashhandlerUnderscorev2LambdaFunction'
    >>> naming.get_lambda_version_output_logical_id("router")
    'RouterLambdaFunctionQualifiedArn'
    """

    def normalize_name(self, name: str) -> str:
        return name[:1].upper() + name[1:]

    def get_normalized_function_name(self, function_name: str) -> str:
        return self.normalize_name(function_name.replace("-", "Dash").replace("_", "Underscore"))

    def get_lambda_logical_id(self, function_name: str) -> str:
        return f"{self.get_normalized_function_name(function_name)}LambdaFunction"

    def get_lambda_version_output_logical_id(self, function_name: str) -> str:
        return f"{self.get_lambda_logical_id(function_name)}QualifiedArn"

    def get_role_logical_id(self) -> str:
        return "IamRoleLambdaExecution"
