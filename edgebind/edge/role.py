import logging

from edgebind.config import EdgeConfig
from edgebind.edge.report import TransformReport
from edgebind.naming import NamingResolver, ServerlessNaming
from edgebind.template import Template, service_principals, set_service_principals

logger = logging.getLogger(__name__)


def augment_execution_role(
    template: Template,
    *,
    config: EdgeConfig | None = None,
    naming: NamingResolver | None = None,
    report: TransformReport | None = None,
    log: logging.Logger | None = None,
) -> None:
    """Let Lambda@Edge assume the execution role and write logs from any region.

    Calling this twice appends the log statement twice.
    """
    config = config or EdgeConfig()
    naming = naming or ServerlessNaming()
    report = report if report is not None else TransformReport()
    log = log or logger

    role_logical_id = config.role_logical_id or naming.get_role_logical_id()
    role = template.execution_role(role_logical_id)
    if role is None:
        message = (
            f"No IAM role for Lambda execution found ('{role_logical_id}') - "
            "can not modify assume role policy"
        )
        log.warning(message)
        report.warnings.append(message)
        return

    # Read first so a role without an inline policy fails before any change
    permission_statements = role.permission_statements

    updated = False
    for statement in role.trust_statements:
        services = service_principals(statement)
        if services is None:
            continue
        if (
            config.lambda_service_principal in services
            and config.edge_service_principal not in services
        ):
            services.append(config.edge_service_principal)
            set_service_principals(statement, services)
            updated = True
            log.info(
                "Updated assume role policy of '%s' to allow %s to assume the role",
                role_logical_id,
                config.edge_service_principal,
            )

    if not updated:
        message = (
            f"Was unable to update the assume role policy of '{role_logical_id}' "
            f"to allow {config.edge_service_principal} to assume the role"
        )
        log.warning(message)
        report.warnings.append(message)

    permission_statements.append(
        {
            "Effect": "Allow",
            "Action": list(config.log_actions),
            "Resource": config.log_resource,
        }
    )
    log.debug(
        "Granted %s on %s to '%s'",
        ", ".join(config.log_actions),
        config.log_resource,
        role_logical_id,
    )
