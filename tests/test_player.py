import math

import pytest
from blessed.keyboard import Keystroke

from token_rush.player import InputHandler


def test_no_keys_is_zero_vector():
    assert InputHandler().get_movement_vector() == (0.0, 0.0)


def test_up_right_is_unit_diagonal():
    handler = InputHandler()
    handler.key_down('KEY_UP')
    handler.key_down('d')
    dx, dy = handler.get_movement_vector()
    assert math.isclose(math.hypot(dx, dy), 1.0)
    assert math.isclose(dx, math.sqrt(0.5))
    assert math.isclose(dy, -math.sqrt(0.5))


def test_opposite_keys_cancel():
    handler = InputHandler()
    handler.key_down('a')
    handler.key_down('KEY_RIGHT')
    assert handler.get_movement_vector() == (0.0, 0.0)


def test_key_up_releases_direction():
    handler = InputHandler()
    handler.key_down('W')
    assert handler.get_movement_vector() == (0.0, -1.0)
    handler.key_up('w')
    assert handler.get_movement_vector() == (0.0, 0.0)


def test_gesture_below_deadzone_is_zero():
    handler = InputHandler(deadzone=5.0)
    handler.pointer_start(1, 100, 100)
    handler.pointer_move(1, 103, 100)
    assert handler.read_intent().is_zero


@pytest.mark.parametrize('displacement', [30, 300])
def test_gesture_has_no_analog_ramp(displacement):
    handler = InputHandler()
    handler.pointer_start(1, 50, 50)
    handler.pointer_move(1, 50 + displacement, 50)
    intent = handler.read_intent()
    assert (intent.dx, intent.dy) == (1.0, 0.0)


def test_gesture_overrides_keyboard():
    handler = InputHandler()
    handler.key_down('KEY_UP')
    handler.pointer_start(1, 0, 0)
    handler.pointer_move(1, 0, 40)
    assert handler.get_movement_vector() == (0.0, 1.0)


def test_second_gesture_is_ignored():
    handler = InputHandler()
    handler.pointer_start(1, 0, 0)
    handler.pointer_start(2, 500, 500)
    handler.pointer_move(2, 0, 500)
    handler.pointer_move(1, -50, 0)
    assert handler.pointer_id == 1
    assert handler.get_movement_vector() == (-1.0, 0.0)


@pytest.mark.parametrize('lift', ['pointer_end', 'pointer_cancel'])
def test_lifting_gesture_zeroes_all_direction_state(lift):
    handler = InputHandler()
    handler.key_down('KEY_LEFT')
    handler.pointer_start(1, 0, 0)
    handler.pointer_move(1, 0, 40)
    getattr(handler, lift)(1)
    assert not handler.gesture_active
    assert handler.get_movement_vector() == (0.0, 0.0)


def test_lifting_other_pointer_keeps_gesture():
    handler = InputHandler()
    handler.pointer_start(1, 0, 0)
    handler.pointer_move(1, 20, 0)
    handler.pointer_end(2)
    assert handler.gesture_active
    assert handler.get_movement_vector() == (1.0, 0.0)


def test_terminal_keystroke_hold_decays():
    handler = InputHandler(hold_frames=2)
    handler.process_key(Keystroke('s'))
    assert handler.get_movement_vector() == (0.0, 1.0)
    handler.update()
    assert handler.get_movement_vector() == (0.0, 1.0)
    handler.update()
    assert handler.get_movement_vector() == (0.0, 0.0)


def test_arrow_sequence_keystroke():
    handler = InputHandler()
    handler.process_key(Keystroke('\x1b[D', code=260, name='KEY_LEFT'))
    assert handler.get_movement_vector() == (-1.0, 0.0)


def test_held_keys_survive_update():
    handler = InputHandler(hold_frames=1)
    handler.key_down('KEY_DOWN')
    for _ in range(10):
        handler.update()
    assert handler.get_movement_vector() == (0.0, 1.0)


def test_action_triggers_are_consumed_once():
    handler = InputHandler()
    for key in ('p', 'h', 'q', 'r'):
        handler.process_key(Keystroke(key))
    assert handler.consume_pause()
    assert not handler.consume_pause()
    assert handler.consume_hint()
    assert handler.consume_quit()
    assert handler.consume_restart()
    assert not handler.consume_restart()


def test_escape_quits():
    handler = InputHandler()
    handler.process_key(Keystroke('\x1b', code=361, name='KEY_ESCAPE'))
    assert handler.consume_quit()


def test_clear_drops_everything():
    handler = InputHandler()
    handler.key_down('w')
    handler.key_down('p')
    handler.pointer_start(1, 0, 0)
    handler.clear()
    assert handler.get_movement_vector() == (0.0, 0.0)
    assert not handler.gesture_active
    assert not handler.consume_pause()
