import pytest

from block_drop_rl.game import Action, DebouncedInput, FrameInput, InputSource, KeyState


def test_frame_input_reports_only_given_actions():
    inputs = FrameInput(Action.LEFT, Action.HOLD)
    assert inputs.pressed(Action.LEFT)
    assert inputs.pressed(Action.HOLD)
    assert inputs.state(Action.RIGHT) is KeyState.RELEASED
    assert not FrameInput(Action.NONE).pressed(Action.NONE)


def test_press_then_refractory_then_repeat():
    inputs = DebouncedInput(refractory_frames=3)
    inputs.poll({Action.LEFT: True})
    assert inputs.state(Action.LEFT) is KeyState.PRESSED
    for _ in range(3):
        inputs.poll({Action.LEFT: True})
        assert inputs.state(Action.LEFT) is KeyState.HELD
    inputs.poll({Action.LEFT: True})
    assert inputs.state(Action.LEFT) is KeyState.PRESSED


def test_release_during_refractory_does_not_retrigger():
    inputs = DebouncedInput(refractory_frames=3)
    inputs.poll({Action.ROTATE_CW: True})
    inputs.poll({})
    assert inputs.state(Action.ROTATE_CW) is KeyState.RELEASED
    inputs.poll({Action.ROTATE_CW: True})
    assert inputs.state(Action.ROTATE_CW) is KeyState.HELD


def test_counters_are_independent_per_action():
    inputs = DebouncedInput(refractory_frames=5)
    inputs.poll({Action.LEFT: True})
    inputs.poll({Action.LEFT: True, Action.HARD_DROP: True})
    assert inputs.state(Action.LEFT) is KeyState.HELD
    assert inputs.state(Action.HARD_DROP) is KeyState.PRESSED


def test_separate_sources_do_not_share_state():
    a = DebouncedInput(refractory_frames=5)
    b = DebouncedInput(refractory_frames=5)
    a.poll({Action.SOFT_DROP: True})
    b.poll({Action.SOFT_DROP: True})
    assert a.pressed(Action.SOFT_DROP)
    assert b.pressed(Action.SOFT_DROP)


def test_untracked_action_is_released():
    inputs = DebouncedInput(actions=[Action.LEFT])
    inputs.poll({Action.RIGHT: True})
    assert inputs.state(Action.RIGHT) is KeyState.RELEASED


def test_base_source_requires_state():
    with pytest.raises(NotImplementedError):
        InputSource().pressed(Action.LEFT)
