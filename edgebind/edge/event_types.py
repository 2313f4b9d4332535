from typing import Literal, TypeAlias

from edgebind.exceptions import InvalidEventTypeError

EventType: TypeAlias = Literal["viewer-request", "origin-request", "viewer-response", "origin-response"]

EVENT_TYPES: tuple[EventType, ...] = (
    "viewer-request",
    "origin-request",
    "viewer-response",
    "origin-response",
)
# Lambda@Edge only exposes the request body to request triggers
BODY_EVENT_TYPES: tuple[EventType, ...] = ("viewer-request", "origin-request")


def validate_event_type(event_type: object) -> EventType:
    """Return event_type unchanged if it is a Lambda@Edge event type.

    Matching is exact: "Viewer-Request" or " viewer-request" are rejected.
    """
    if not isinstance(event_type, str) or event_type not in EVENT_TYPES:
        raise InvalidEventTypeError(event_type, EVENT_TYPES)
    return event_type
