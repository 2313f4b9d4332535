from dataclasses import dataclass, field
from typing import ClassVar

from edgebind.naming import NamingResolver, ServerlessNaming


@dataclass(frozen=True)
class TransformContext:
    """Context information available while a template is being transformed."""

    stage: str
    naming: NamingResolver = field(default_factory=ServerlessNaming)


class _ContextStore:
    """Internal storage for the global transform context."""

    _instance: ClassVar[TransformContext | None] = None

    @classmethod
    def set(cls, context: TransformContext) -> None:
        """Set the global context. Can only be called once."""
        if cls._instance is not None:
            raise RuntimeError("Context has already been initialized")
        cls._instance = context

    @classmethod
    def get(cls) -> TransformContext:
        """Get the global context."""
        if cls._instance is None:
            raise RuntimeError(
                "edgebind context not initialized. Pass stage and naming to the "
                "transformer explicitly or set the context before transforming."
            )
        return cls._instance

    @classmethod
    def is_set(cls) -> bool:
        return cls._instance is not None

    @classmethod
    def clear(cls) -> None:
        """Clear the context. Only used for testing."""
        cls._instance = None


def context() -> TransformContext:
    """Get the current transform context.

    Raises:
        RuntimeError: If called before context is initialized.
    """
    return _ContextStore.get()
