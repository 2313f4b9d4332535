from collections.abc import Sequence


class EdgebindError(Exception):
    """Base class for all errors raised by edgebind."""


class TemplateFormatError(EdgebindError):
    """Raised when a template or function declaration is not shaped as expected."""


class EdgeAssociationError(EdgebindError, ValueError):
    """Raised when an edge association can't be bound to the template.

    These are configuration errors: the transformation stops at the first one.
    """


class InvalidEventTypeError(EdgeAssociationError):
    def __init__(self, event_type: object, allowed: Sequence[str]):
        self.event_type = event_type
        self.allowed = tuple(allowed)
        super().__init__(
            f'"{event_type}" is not a valid event type, must be one of: {", ".join(self.allowed)}'
        )


class FunctionResourceNotFoundError(EdgeAssociationError):
    def __init__(self, function_name: str, logical_id: str):
        self.function_name = function_name
        self.logical_id = logical_id
        super().__init__(
            f"Could not find resource '{logical_id}' for function '{function_name}'"
        )


class VersionOutputNotFoundError(EdgeAssociationError):
    def __init__(self, output_name: str):
        self.output_name = output_name
        super().__init__(
            f"Could not find output by name of: {output_name} "
            f"or value from it to use version ARN"
        )


class DistributionNotFoundError(EdgeAssociationError):
    def __init__(self, logical_id: str):
        self.logical_id = logical_id
        super().__init__(f'Could not find resource with logical name "{logical_id}"')


class InvalidDistributionTypeError(EdgeAssociationError):
    def __init__(self, logical_id: str, actual_type: object, expected_type: str):
        self.logical_id = logical_id
        self.actual_type = actual_type
        self.expected_type = expected_type
        super().__init__(
            f'Resource with logical name "{logical_id}" is not type {expected_type} '
            f"(found {actual_type})"
        )


class CacheBehaviorNotFoundError(EdgeAssociationError):
    def __init__(self, distribution: str, path_pattern: str):
        self.distribution = distribution
        self.path_pattern = path_pattern
        super().__init__(
            f'Could not find cache behavior in "{distribution}" '
            f'with path pattern "{path_pattern}"'
        )


class IncludeBodyNotAllowedError(EdgeAssociationError):
    def __init__(self, event_type: str, allowed: Sequence[str]):
        self.event_type = event_type
        self.allowed = tuple(allowed)
        super().__init__(
            f'includeBody is not supported for "{event_type}", '
            f"only for: {', '.join(self.allowed)}"
        )


class DistributionRequiredError(EdgeAssociationError):
    def __init__(self, option: str):
        self.option = option
        super().__init__(f"{option} can only be used together with a distribution")


class StageNotSetError(EdgeAssociationError):
    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(
            f"No stage to build export names for function '{function_name}': "
            "pass a stage or set the transform context"
        )
