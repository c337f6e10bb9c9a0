import pytest

from chip8.constants import FONT_MAP, FONT_LOAD, LOAD_POS, TOTAL_RAM
from chip8.errors import (OutOfBoundsAccess, ProgramTooLarge, StackOverflow,
                          StackUnderflow)
from chip8.loader import boot, read_rom
from chip8.machine import Machine


def test_initial_state():
    m = Machine()
    assert len(m.memory) == 4096
    assert not any(m.memory)
    assert list(m.registers) == [0] * 16
    assert m.program_counter == 0x200
    assert m.index_register == 0
    assert m.stack_pointer == 0
    assert m.delay_timer == m.sound_timer == 0
    assert m.keypad == [False] * 16
    assert m.awaiting_key is None


def test_fonts_at_0x50(machine):
    assert machine.memory[0x50:0xA0] == FONT_MAP
    assert len(FONT_MAP) == 80
    # glyph for 0
    assert machine.read(FONT_LOAD, 5) == bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])


def test_fetch_is_big_endian_and_advances():
    m = Machine()
    m.load_program(bytes([0x6A, 0x02, 0x7A, 0x03]))
    assert m.fetch() == 0x6A02
    assert m.program_counter == 0x202
    assert m.fetch() == 0x7A03
    assert m.program_counter == 0x204


def test_fetch_out_of_bounds():
    m = Machine()
    m.program_counter = 0xFFF
    with pytest.raises(OutOfBoundsAccess):
        m.fetch()
    assert m.program_counter == 0xFFF


def test_fetch_last_word():
    m = Machine()
    m.memory[0xFFE:0x1000] = b"\x12\x00"
    m.program_counter = 0xFFE
    assert m.fetch() == 0x1200


def test_program_must_fit():
    m = Machine()
    m.load_program(bytes(TOTAL_RAM - LOAD_POS))
    with pytest.raises(ProgramTooLarge):
        Machine().load_program(bytes(TOTAL_RAM - LOAD_POS + 1))


def test_read_write_bounds(machine):
    machine.write(0x300, b"\x01\x02")
    assert machine.read(0x300, 2) == b"\x01\x02"
    with pytest.raises(OutOfBoundsAccess):
        machine.write(0xFFF, b"\x01\x02")
    # nothing written on failure
    assert machine.memory[0xFFF] == 0
    with pytest.raises(OutOfBoundsAccess):
        machine.read(0x1000)


def test_stack_push_pop():
    m = Machine()
    m.push(0x202)
    m.push(0x304)
    assert m.stack_pointer == 2
    assert m.pop() == 0x304
    assert m.pop() == 0x202
    assert m.stack_pointer == 0


def test_stack_overflow():
    m = Machine()
    for n in range(16):
        m.push(0x200 + 2 * n)
    with pytest.raises(StackOverflow):
        m.push(0x400)
    assert m.stack_pointer == 16


def test_stack_underflow():
    with pytest.raises(StackUnderflow):
        Machine().pop()


def test_timers_count_down_to_zero():
    m = Machine()
    m.delay_timer = 2
    m.sound_timer = 1
    assert m.sound_active
    m.tick_timers()
    assert (m.delay_timer, m.sound_timer) == (1, 0)
    assert not m.sound_active
    m.tick_timers()
    m.tick_timers()
    assert (m.delay_timer, m.sound_timer) == (0, 0)


def test_new_key_presses_are_edges():
    m = Machine()
    keys = [False] * 16
    keys[3] = True
    m.set_keypad(keys)
    assert m.new_key_presses() == [3]
    m.set_keypad(keys)
    assert m.new_key_presses() == []
    keys[7] = True
    m.set_keypad(keys)
    assert m.new_key_presses() == [7]


def test_keypad_snapshot_size():
    with pytest.raises(ValueError):
        Machine().set_keypad([False] * 15)


def test_key_pressed_rejects_bad_key():
    with pytest.raises(OutOfBoundsAccess):
        Machine().key_pressed(0x10)


def test_boot_from_file(tmp_path):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(b"\x00\xE0\x12\x00")
    assert read_rom(rom) == b"\x00\xE0\x12\x00"
    m = boot(rom)
    assert m.memory[0x200:0x204] == b"\x00\xE0\x12\x00"
    assert m.memory[0x50:0xA0] == FONT_MAP
    assert m.program_counter == 0x200


def test_boot_from_bytes():
    m = boot(b"\x6A\x02")
    assert m.fetch() == 0x6A02


def test_key_wait_baseline_is_current_snapshot():
    m = Machine()
    keys = [False] * 16
    keys[4] = True
    m.set_keypad(keys)
    assert m.new_key_presses() == [4]
    m.begin_key_wait(2)
    assert m.awaiting_key == 2
    assert m.new_key_presses() == []
    keys[6] = True
    m.set_keypad(keys)
    assert m.new_key_presses() == [6]
