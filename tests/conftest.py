import random

import pytest

from chip8.cpu import Interpreter
from chip8.framebuffer import Framebuffer
from chip8.machine import Machine


@pytest.fixture
def machine():
    m = Machine()
    m.load_fonts()
    return m


@pytest.fixture
def framebuffer():
    return Framebuffer()


@pytest.fixture
def cpu(machine, framebuffer):
    return Interpreter(machine, framebuffer, rng=random.Random(8))


def load(machine, *opcodes, at=0x200):
    """Write opcodes big-endian starting at at"""
    program = b"".join(op.to_bytes(2, "big") for op in opcodes)
    machine.write(at, program)
    machine.program_counter = at


def run(cpu, *opcodes):
    """Load opcodes at 0x200 and execute exactly that many instructions"""
    load(cpu.machine, *opcodes)
    for _ in opcodes:
        cpu.step()
