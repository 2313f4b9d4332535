import logging
from collections.abc import Mapping
from typing import Any, final

from edgebind.config import EdgeConfig
from edgebind.context import _ContextStore, context
from edgebind.edge.association import read_function_associations
from edgebind.edge.binder import bind_edge_association
from edgebind.edge.report import TransformReport
from edgebind.edge.role import augment_execution_role
from edgebind.naming import NamingResolver, ServerlessNaming
from edgebind.template import Template

logger = logging.getLogger(__name__)


@final
class TemplateTransformer:
    """Wire Lambda@Edge associations into a compiled template.

    The template is mutated in place. The first configuration error stops the run
    and whatever was already changed stays changed.

    Naming and stage default to the transform context when one is set, so the same
    transformer can be shared between stages.
    """

    def __init__(
        self,
        config: EdgeConfig | None = None,
        naming: NamingResolver | None = None,
        stage: str | None = None,
        log: logging.Logger | None = None,
    ):
        self.config = config or EdgeConfig()
        self._naming = naming
        self._stage = stage
        self.log = log or logger

    @property
    def naming(self) -> NamingResolver:
        if self._naming is not None:
            return self._naming
        if _ContextStore.is_set():
            return context().naming
        return ServerlessNaming()

    @property
    def stage(self) -> str | None:
        if self._stage is not None:
            return self._stage
        return context().stage if _ContextStore.is_set() else None

    def transform(
        self, template: dict[str, Any], functions: Mapping[str, Mapping[str, Any]] | None
    ) -> TransformReport:
        """Augment the execution role once, then bind every declared association.

        Functions are processed in mapping order and each function's associations in
        declaration order; that order is the order entries end up in the cache
        behaviors' association lists.
        """
        document = Template(template)
        report = TransformReport()
        naming = self.naming

        augment_execution_role(
            document, config=self.config, naming=naming, report=report, log=self.log
        )

        for function_name, definition in (functions or {}).items():
            associations = read_function_associations(function_name, definition)
            if not associations:
                continue
            self.log.debug(
                "Binding %d edge association(s) for function '%s'",
                len(associations),
                function_name,
            )
            for association in associations:
                bind_edge_association(
                    document,
                    function_name,
                    association,
                    config=self.config,
                    naming=naming,
                    stage=self.stage,
                    report=report,
                    log=self.log,
                )

        return report
