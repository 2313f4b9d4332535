import logging

from edgebind.config import EdgeConfig
from edgebind.context import _ContextStore, context
from edgebind.edge.association import EdgeAssociation
from edgebind.edge.report import BoundAssociation, TransformReport
from edgebind.exceptions import (
    CacheBehaviorNotFoundError,
    DistributionNotFoundError,
    FunctionResourceNotFoundError,
    InvalidDistributionTypeError,
    StageNotSetError,
    VersionOutputNotFoundError,
)
from edgebind.naming import NamingResolver, ServerlessNaming
from edgebind.template import CacheBehavior, FunctionResource, Output, Template

logger = logging.getLogger(__name__)


def bind_edge_association(  # noqa: PLR0913
    template: Template,
    function_name: str,
    association: EdgeAssociation,
    *,
    config: EdgeConfig | None = None,
    naming: NamingResolver | None = None,
    stage: str | None = None,
    report: TransformReport | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Bind one function's immutable version to a Lambda@Edge event.

    Every check runs before the template is touched, so a failing association leaves
    the template as it was. With a distribution the version is appended to the
    matching cache behavior's LambdaFunctionAssociations; without one the function's
    outputs only get export names for use by another stack.
    """
    config = config or EdgeConfig()
    naming = naming or ServerlessNaming()
    report = report if report is not None else TransformReport()
    log = log or logger

    event_type = association.validate()

    function_logical_id = naming.get_lambda_logical_id(function_name)
    function = template.function(function_logical_id)
    if function is None:
        raise FunctionResourceNotFoundError(function_name, function_logical_id)

    output_name = naming.get_lambda_version_output_logical_id(function_name)
    output = template.output(output_name)
    version_logical_id = output.version_logical_id if output else None
    if output is None or version_logical_id is None:
        raise VersionOutputNotFoundError(output_name)

    behavior = None
    if association.distribution:
        behavior = _resolve_cache_behavior(template, association, config)
    else:
        stage = _resolve_stage(function_name, stage)

    _strip_environment(function, report, log)

    if behavior is not None:
        behavior.add_function_association(
            event_type, version_logical_id, include_body=association.include_body
        )
        location = (
            f' on path pattern "{association.path_pattern}"' if association.path_pattern else ""
        )
        _notice(
            report,
            log,
            f'Added "{event_type}" Lambda@Edge association for version '
            f'"{version_logical_id}" to "{association.distribution}"{location}',
        )
    else:
        _stamp_exports(
            template,
            function_logical_id,
            output,
            event_type,
            version_logical_id,
            stage,
            report,
            log,
        )

    report.associations.append(
        BoundAssociation(
            function_name=function_name,
            event_type=event_type,
            version_logical_id=version_logical_id,
            distribution=association.distribution,
            path_pattern=association.path_pattern,
        )
    )


def _resolve_stage(function_name: str, stage: str | None) -> str:
    if not stage and _ContextStore.is_set():
        stage = context().stage
    if not stage:
        raise StageNotSetError(function_name)
    return stage


def _resolve_cache_behavior(
    template: Template, association: EdgeAssociation, config: EdgeConfig
) -> CacheBehavior:
    distribution = template.distribution(association.distribution)
    if distribution is None:
        raise DistributionNotFoundError(association.distribution)
    if distribution.type != config.distribution_type:
        raise InvalidDistributionTypeError(
            association.distribution, distribution.type, config.distribution_type
        )

    if not association.path_pattern:
        return distribution.default_cache_behavior

    behavior = distribution.find_cache_behavior(association.path_pattern)
    if behavior is None:
        raise CacheBehaviorNotFoundError(association.distribution, association.path_pattern)
    return behavior


def _strip_environment(
    function: FunctionResource, report: TransformReport, log: logging.Logger
) -> None:
    # Lambda@Edge rejects functions with environment variables
    removed = function.strip_environment_variables()
    if removed:
        _notice(
            report,
            log,
            f"Removing {removed} environment variables from function {function.logical_id} "
            "because Lambda@Edge does not support environment variables",
        )


def _stamp_exports(  # noqa: PLR0913
    template: Template,
    function_logical_id: str,
    output: Output,
    event_type: str,
    version_logical_id: str,
    stage: str,
    report: TransformReport,
    log: logging.Logger,
) -> None:
    template.set_output(
        f"{function_logical_id}EventType",
        {
            "Description": "The event type for this function",
            "Value": event_type,
            "Export": {"Name": f"{function_logical_id}:{stage}-EventType"},
        },
    )
    output.set_export_name(f"{function_logical_id}:{stage}-ARN")

    _notice(
        report,
        log,
        f'Added "{event_type}" Lambda@Edge association for version: {version_logical_id}',
    )
    _notice(
        report,
        log,
        "Reminder: if you reference this ARN anywhere you need to reference "
        f"the new value now: {version_logical_id}",
    )


def _notice(report: TransformReport, log: logging.Logger, message: str) -> None:
    log.info(message)
    report.notices.append(message)
