import pytest

from jvmtui.theme import Theme
from jvmtui.types import ThreadState


def test_default_primary_colour():
    assert Theme().primary == "cyan"


@pytest.mark.parametrize(
    "state, field",
    [
        (ThreadState.RUNNABLE, "thread_state_runnable"),
        (ThreadState.BLOCKED, "thread_state_blocked"),
        (ThreadState.WAITING, "thread_state_waiting"),
        (ThreadState.TIMED_WAITING, "thread_state_timed_waiting"),
        (ThreadState.TERMINATED, "thread_state_terminated"),
        (ThreadState.NEW, "thread_state_new"),
    ],
)
def test_thread_state_color_uses_matching_field(state, field):
    theme = Theme()
    assert theme.thread_state_color(state) == getattr(theme, field)


def test_thread_state_color_follows_customisation():
    theme = Theme(thread_state_blocked="blue")
    assert theme.thread_state_color(ThreadState.BLOCKED) == "blue"


@pytest.mark.parametrize(
    "ratio, field",
    [
        (0.95, "memory_critical"),
        (0.91, "memory_critical"),
        (0.9, "memory_high"),
        (0.8, "memory_high"),
        (0.7, "success"),
        (0.0, "success"),
    ],
)
def test_memory_color_thresholds(ratio, field):
    theme = Theme()
    assert theme.memory_color(ratio) == getattr(theme, field)


def test_memory_color_follows_customisation():
    theme = Theme(memory_critical="blue")
    assert theme.memory_color(1.0) == "blue"


def test_theme_is_immutable():
    with pytest.raises(AttributeError):
        Theme().primary = "red"