from dataclasses import dataclass, field
from typing import final


@final
@dataclass(frozen=True)
class BoundAssociation:
    function_name: str
    event_type: str
    version_logical_id: str
    distribution: str | None = None
    path_pattern: str | None = None


@dataclass
class TransformReport:
    """What a transformation did besides mutating the template.

    Fatal problems are raised as exceptions and never end up here.
    """

    warnings: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)
    associations: list[BoundAssociation] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
