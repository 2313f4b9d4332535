import pytest

from edgebind.context import TransformContext, _ContextStore

from .templates import build_template


@pytest.fixture(autouse=True)
def transform_context():
    _ContextStore.clear()
    _ContextStore.set(TransformContext(stage="test"))
    yield
    _ContextStore.clear()


@pytest.fixture
def template():
    return build_template()
