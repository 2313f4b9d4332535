from .association import EdgeAssociation, EdgeAssociationDict, normalize_edge_associations
from .binder import bind_edge_association
from .event_types import EVENT_TYPES, EventType, validate_event_type
from .report import BoundAssociation, TransformReport
from .role import augment_execution_role
from .transformer import TemplateTransformer

__all__ = [
    "EVENT_TYPES",
    "BoundAssociation",
    "EdgeAssociation",
    "EdgeAssociationDict",
    "EventType",
    "TemplateTransformer",
    "TransformReport",
    "augment_execution_role",
    "bind_edge_association",
    "normalize_edge_associations",
    "validate_event_type",
]
