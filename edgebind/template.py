"""Typed views over a compiled CloudFormation template.

Each view wraps the caller's own mapping and reads or writes it in place. Keys the
views don't know about are left untouched.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias, final

from edgebind.exceptions import TemplateFormatError

JsonDict: TypeAlias = dict[str, Any]


def _as_list(value: Any) -> list:
    """CloudFormation accepts a single item wherever a list of items is expected."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


@dataclass(frozen=True)
class Resource:
    logical_id: str
    data: JsonDict

    @property
    def type(self) -> str | None:
        return self.data.get("Type")

    @property
    def properties(self) -> JsonDict:
        return self.data.get("Properties") or {}


@final
@dataclass(frozen=True)
class ExecutionRole(Resource):
    @property
    def trust_statements(self) -> list[JsonDict]:
        document = self.properties.get("AssumeRolePolicyDocument") or {}
        return _as_list(document.get("Statement"))

    @property
    def permission_statements(self) -> list[JsonDict]:
        """Statements of the first inline policy, the one the framework manages."""
        policies = self.properties.get("Policies") or []
        if not policies:
            raise TemplateFormatError(
                f"Execution role '{self.logical_id}' has no inline policy to extend"
            )
        document = policies[0].setdefault("PolicyDocument", {})
        statements = document.get("Statement")
        if not isinstance(statements, list):
            statements = document["Statement"] = _as_list(statements)
        return statements


def service_principals(statement: Mapping[str, Any]) -> list[str] | None:
    """Return the statement's Principal.Service as a list, or None if it has none.

    A single string service is returned as a new one-element list; use
    `set_service_principals` to write changes back.
    """
    principal = statement.get("Principal")
    if not isinstance(principal, Mapping):
        return None
    services = principal.get("Service")
    if not services:
        return None
    return _as_list(services)


def set_service_principals(statement: JsonDict, services: list[str]) -> None:
    statement["Principal"]["Service"] = services


@final
@dataclass(frozen=True)
class FunctionResource(Resource):
    def strip_environment_variables(self) -> int:
        """Delete Environment.Variables, and Environment itself if left empty.

        Returns:
            Number of variables removed.
        """
        environment = self.properties.get("Environment")
        if not environment or not environment.get("Variables"):
            return 0
        removed = len(environment["Variables"])
        del environment["Variables"]
        if not environment:
            del self.properties["Environment"]
        return removed


@final
@dataclass(frozen=True)
class CacheBehavior:
    data: JsonDict

    @property
    def path_pattern(self) -> str | None:
        """None for the default cache behavior."""
        return self.data.get("PathPattern")

    @property
    def function_associations(self) -> list[JsonDict]:
        associations = self.data.get("LambdaFunctionAssociations")
        if associations is None:
            associations = self.data["LambdaFunctionAssociations"] = []
        return associations

    def add_function_association(
        self, event_type: str, version_logical_id: str, include_body: bool | None = None
    ) -> JsonDict:
        association: JsonDict = {
            "EventType": event_type,
            "LambdaFunctionARN": {"Ref": version_logical_id},
        }
        if include_body is not None:
            association["IncludeBody"] = include_body
        self.function_associations.append(association)
        return association


@final
@dataclass(frozen=True)
class Distribution(Resource):
    @property
    def distribution_config(self) -> JsonDict:
        config = self.properties.get("DistributionConfig")
        if not isinstance(config, dict):
            raise TemplateFormatError(
                f"Distribution '{self.logical_id}' has no DistributionConfig"
            )
        return config

    @property
    def default_cache_behavior(self) -> CacheBehavior:
        behavior = self.distribution_config.get("DefaultCacheBehavior")
        if not isinstance(behavior, dict):
            raise TemplateFormatError(
                f"Distribution '{self.logical_id}' has no DefaultCacheBehavior"
            )
        return CacheBehavior(behavior)

    @property
    def cache_behaviors(self) -> list[CacheBehavior]:
        return [
            CacheBehavior(behavior)
            for behavior in _as_list(self.distribution_config.get("CacheBehaviors"))
        ]

    def find_cache_behavior(self, path_pattern: str) -> CacheBehavior | None:
        return next(
            (b for b in self.cache_behaviors if b.path_pattern == path_pattern),
            None,
        )


@final
@dataclass(frozen=True)
class Output:
    name: str
    data: JsonDict

    @property
    def value(self) -> Any:
        return self.data.get("Value")

    @property
    def version_logical_id(self) -> str | None:
        """Logical id the output's Value references, e.g. {"Ref": "FooLambdaVersionAbc"}."""
        value = self.value
        if not isinstance(value, Mapping):
            return None
        ref = value.get("Ref")
        if not isinstance(ref, str) or not ref:
            return None
        return ref

    @property
    def export_name(self) -> str | None:
        return (self.data.get("Export") or {}).get("Name")

    def set_export_name(self, name: str) -> None:
        self.data["Export"] = {"Name": name}


@final
class Template:
    """The compiled template: a mapping with Resources and Outputs."""

    def __init__(self, data: JsonDict):
        if not isinstance(data, dict):
            raise TemplateFormatError(
                f"Template must be a mapping, got {type(data).__name__}"
            )
        self.data = data

    @property
    def resources(self) -> JsonDict:
        return self.data.get("Resources") or {}

    @property
    def outputs(self) -> JsonDict:
        outputs = self.data.get("Outputs")
        if outputs is None:
            outputs = self.data["Outputs"] = {}
        return outputs

    def execution_role(self, logical_id: str) -> ExecutionRole | None:
        data = self.resources.get(logical_id)
        return ExecutionRole(logical_id, data) if isinstance(data, dict) else None

    def function(self, logical_id: str) -> FunctionResource | None:
        data = self.resources.get(logical_id)
        return FunctionResource(logical_id, data) if isinstance(data, dict) else None

    def distribution(self, logical_id: str) -> Distribution | None:
        data = self.resources.get(logical_id)
        return Distribution(logical_id, data) if isinstance(data, dict) else None

    def output(self, name: str) -> Output | None:
        data = (self.data.get("Outputs") or {}).get(name)
        return Output(name, data) if isinstance(data, dict) else None

    def set_output(self, name: str, data: JsonDict) -> Output:
        self.outputs[name] = data
        return Output(name, data)
