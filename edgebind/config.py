from dataclasses import dataclass

from edgebind.constants import (
    CLOUDFRONT_DISTRIBUTION_TYPE,
    EDGE_LAMBDA_SERVICE_PRINCIPAL,
    EDGE_LOG_ACTIONS,
    EDGE_LOG_RESOURCE,
    LAMBDA_SERVICE_PRINCIPAL,
)


@dataclass(frozen=True, kw_only=True)
class EdgeConfig:
    """Knobs for the Lambda@Edge template transformation.

    The defaults match templates compiled by the Serverless Framework for AWS and
    rarely need changing.

    Attributes:
        role_logical_id: Logical id of the shared Lambda execution role. When None the
            naming resolver decides (``IamRoleLambdaExecution`` by default).
        lambda_service_principal: Principal that must already be trusted by the role
            for the edge principal to be added next to it.
        edge_service_principal: Principal Lambda@Edge uses to assume the role.
        log_actions: Actions granted so replicated functions can write logs.
        log_resource: Resource the log actions are granted on.
        distribution_type: Resource type a named distribution must have.

    ## Examples

    Custom role name:
    ```python
    EdgeConfig(role_logical_id="EdgeFunctionsRole")
    ```
    """

    role_logical_id: str | None = None
    lambda_service_principal: str = LAMBDA_SERVICE_PRINCIPAL
    edge_service_principal: str = EDGE_LAMBDA_SERVICE_PRINCIPAL
    log_actions: tuple[str, ...] = EDGE_LOG_ACTIONS
    log_resource: str = EDGE_LOG_RESOURCE
    distribution_type: str = CLOUDFRONT_DISTRIBUTION_TYPE

    def __post_init__(self) -> None:
        if self.role_logical_id is not None and not self.role_logical_id.strip():
            raise ValueError("role_logical_id cannot be empty")
        if not self.lambda_service_principal or not self.edge_service_principal:
            raise ValueError("Service principals cannot be empty")
        if self.lambda_service_principal == self.edge_service_principal:
            raise ValueError("lambda_service_principal and edge_service_principal must differ")
        if isinstance(self.log_actions, str):
            raise TypeError("log_actions must be a tuple of strings, not a string")
        if not self.log_actions:
            raise ValueError("log_actions cannot be empty")
