import pytest

from libc_support import runtime, state


@pytest.fixture(autouse=True)
def fresh_state():
    state.reset("test")
    runtime.load_runtime_execution_data()
    yield
    state.reset(None)
