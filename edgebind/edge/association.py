from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias, TypedDict, TypeVar

from edgebind.edge.event_types import BODY_EVENT_TYPES, EventType, validate_event_type
from edgebind.exceptions import (
    DistributionRequiredError,
    IncludeBodyNotAllowedError,
    TemplateFormatError,
)

EDGE_ASSOCIATION_KEY = "edgeAssociation"
# Older declarations use this key
LEGACY_EDGE_ASSOCIATION_KEY = "lambdaAtEdge"


class EdgeAssociationDict(TypedDict, total=False):
    eventType: EventType
    distribution: str
    pathPattern: str
    includeBody: bool


@dataclass(frozen=True, kw_only=True)
class EdgeAssociation:
    """One declared binding of a function to a Lambda@Edge event.

    `distribution` is the logical id of the CloudFront distribution in the template.
    Without it the association only stamps export names on the function's outputs.
    `path_pattern` selects a cache behavior; None means the default behavior.
    """

    event_type: str | None
    distribution: str | None = None
    path_pattern: str | None = None
    include_body: bool | None = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "EdgeAssociation":
        if isinstance(raw, EdgeAssociation):
            return raw
        if not isinstance(raw, Mapping):
            raise TemplateFormatError(
                f"Edge association must be a mapping, got {type(raw).__name__}"
            )
        return cls(
            event_type=raw.get("eventType"),
            distribution=raw.get("distribution") or None,
            path_pattern=raw.get("pathPattern") or None,
            include_body=raw.get("includeBody"),
        )

    def validate(self) -> EventType:
        """Check the association on its own, without looking at any template."""
        event_type = validate_event_type(self.event_type)
        if self.include_body and event_type not in BODY_EVENT_TYPES:
            raise IncludeBodyNotAllowedError(event_type, BODY_EVENT_TYPES)
        # Export-only associations have no cache behavior to apply these to
        if not self.distribution:
            if self.path_pattern:
                raise DistributionRequiredError("pathPattern")
            if self.include_body is not None:
                raise DistributionRequiredError("includeBody")
        return event_type


T = TypeVar("T")
OneOrMany: TypeAlias = T | list[T]


def normalize_edge_associations(
    raw: OneOrMany[EdgeAssociationDict] | None,
) -> list[EdgeAssociationDict]:
    """Return declared association(s) as a list, in declaration order.

    A list is returned as is; a single declaration becomes a one-element list.
    Nothing is validated here.
    """
    if raw is None:
        return []
    if isinstance(raw, list):
        return raw
    return [raw]


def get_edge_associations(function_definition: Mapping[str, Any]) -> list[EdgeAssociation]:
    """Read and normalize the edge association declaration of one function."""
    raw = function_definition.get(EDGE_ASSOCIATION_KEY)
    if raw is None:
        raw = function_definition.get(LEGACY_EDGE_ASSOCIATION_KEY)
    return [EdgeAssociation.from_dict(item) for item in normalize_edge_associations(raw)]


def read_function_associations(function_name: str, definition: Any) -> list[EdgeAssociation]:
    """Edge associations of one entry of the functions mapping.

    A None definition declares nothing; anything else must be a mapping.
    """
    if definition is None:
        return []
    if not isinstance(definition, Mapping):
        raise TemplateFormatError(
            f"Definition of function '{function_name}' must be a mapping, "
            f"got {type(definition).__name__}"
        )
    return get_edge_associations(definition)
