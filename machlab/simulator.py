"""Simulator for a small 32-bit load/store teaching machine."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, TextIO, Tuple

MEMORY_SIZE = 10000 * 4
REGISTER_COUNT = 8
EXEC_ENV = "SIMPLE_MACHINE_ALLOW_EXEC"
USAGE = "usage: sm [-p startPC] [-m addr:count]* [-r] filename"

_HEX_DIGITS = "0123456789abcdefABCDEF"


class MachineError(Exception):
    """Raised when the machine touches memory or registers it does not have."""


def _s32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _strtol16(text: str) -> int:
    """Parse a leading hexadecimal number the way strtol(text, 0, 16) does."""
    s = text.lstrip(" \t\n\r\f\v")
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]
    if s[:2] in ("0x", "0X") and len(s) > 2 and s[2] in _HEX_DIGITS:
        s = s[2:]
    digits = ""
    for ch in s:
        if ch not in _HEX_DIGITS:
            break
        digits += ch
    value = int(digits, 16) if digits else 0
    return -value if negative else value


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction: opcode, three nibble operands, signed immediate, extension word."""

    opcode: int
    op0: int
    op1: int
    op2: int
    imm: int
    ext: int = 0


class Machine:
    """Memory, registers and program counter of the simulated machine."""

    def __init__(
        self,
        memory_size: int = MEMORY_SIZE,
        output: Optional[TextIO] = None,
        halt_on_read: bool = False,
    ) -> None:
        self.memory = bytearray(memory_size)
        self.registers: List[int] = [0] * REGISTER_COUNT
        self.pc = -1
        self.output = output if output is not None else sys.stdout
        self.halt_on_read = halt_on_read

    # -- loading -----------------------------------------------------------

    def load(self, lines: Iterable[str]) -> None:
        """Load lines of the form ``addr: bytes`` into memory.

        The first address seen becomes the program counter unless one was set.
        """
        for raw in lines:
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            if ":" not in line:
                raise ValueError(f"missing ':' in line {line!r}")
            head, rest = line.split(":", 1)
            address = _strtol16(head)
            if self.pc < 0:
                self.pc = address
            pos = 0
            while True:
                while pos < len(rest) and rest[pos] == " ":
                    pos += 1
                if pos + 1 >= len(rest):
                    break
                self._check_range(address, 1)
                self.memory[address] = _strtol16(rest[pos:pos + 2]) & 0xFF
                pos += 2
                address += 1

    def load_file(self, path) -> None:
        """Load a program from a text file."""
        with open(path, "r", encoding="utf-8") as handle:
            self.load(handle)

    # -- memory and registers ----------------------------------------------

    def _check_range(self, address: int, length: int) -> None:
        if address < 0 or length < 0 or address + length > len(self.memory):
            raise MachineError(
                f"memory access out of range: 0x{address & 0xFFFFFFFF:x}"
            )

    def read_word(self, address: int) -> int:
        """Read a big-endian signed 32-bit word."""
        self._check_range(address, 4)
        return _s32(int.from_bytes(self.memory[address:address + 4], "big"))

    def write_word(self, address: int, value: int) -> None:
        """Write a big-endian 32-bit word."""
        self._check_range(address, 4)
        self.memory[address:address + 4] = (value & 0xFFFFFFFF).to_bytes(4, "big")

    def _get(self, index: int) -> int:
        if index >= REGISTER_COUNT:
            raise MachineError(f"no such register: r{index}")
        return self.registers[index]

    def _set(self, index: int, value: int) -> None:
        if index >= REGISTER_COUNT:
            raise MachineError(f"no such register: r{index}")
        self.registers[index] = _s32(value)

    def _say(self, message: str) -> None:
        print(message, file=self.output)

    # -- execution ---------------------------------------------------------

    def fetch(self) -> Instruction:
        """Decode the instruction at pc and advance pc past it."""
        self._check_range(self.pc, 2)
        first, second = self.memory[self.pc], self.memory[self.pc + 1]
        opcode = first >> 4
        imm = second - 256 if second >= 128 else second
        self.pc += 2
        ext = 0
        if opcode in (0x0, 0xB):
            ext = self.read_word(self.pc)
            self.pc += 4
        return Instruction(opcode, first & 0xF, second >> 4, second & 0xF, imm, ext)

    def execute(self, instruction: Instruction) -> bool:
        """Execute one decoded instruction; return False when the machine halts."""
        ins = instruction
        op = ins.opcode
        if op == 0x0:
            self._set(ins.op0, ins.ext)
        elif op == 0x1:
            address = _s32((ins.op0 << 2) + self._get(ins.op1))
            self._set(ins.op2, self.read_word(address))
        elif op == 0x2:
            address = _s32(self._get(ins.op0) + (self._get(ins.op1) << 2))
            self._set(ins.op2, self.read_word(address))
        elif op == 0x3:
            address = _s32((ins.op1 << 2) + self._get(ins.op2))
            self.write_word(address, self._get(ins.op0))
        elif op == 0x4:
            address = _s32(self._get(ins.op1) + (self._get(ins.op2) << 2))
            self.write_word(address, self._get(ins.op0))
        elif op == 0x6:
            self._alu(ins)
        elif op == 0x7:
            value = self._get(ins.op0)
            if ins.imm > 0:
                self._set(ins.op0, value << ins.imm)
            else:
                self._set(ins.op0, value >> -ins.imm)
        elif op == 0x8:
            self.pc = _s32(self.pc + (ins.imm << 1))
        elif op == 0x9:
            if self._get(ins.op0) == 0:
                self.pc = _s32(self.pc + (ins.imm << 1))
        elif op == 0xA:
            if self._get(ins.op0) > 0:
                self.pc = _s32(self.pc + (ins.imm << 1))
        elif op == 0xB:
            self.pc = ins.ext
        elif op == 0xC:
            self.pc = _s32(((ins.imm & 0xFFFF) << 1) + self._get(ins.op0))
        elif op == 0xD:
            self.pc = self.read_word(_s32(ins.imm * 4 + self._get(ins.op0)))
        elif op == 0xE:
            address = _s32(self._get(ins.op1) * 4 + self._get(ins.op0))
            self.pc = self.read_word(address)
        elif op == 0xF:
            if ins.op0 == 0:
                return False
            if ins.op0 == 1:
                return self._system(ins.imm)
        else:
            self._say(
                f"Illegal  instruction: pc=0x{self.pc & 0xFFFFFFFF:x} opCode=0x{op:x}"
            )
        return True

    def _alu(self, ins: Instruction) -> None:
        fun = ins.op0
        if fun == 0x0:
            self._set(ins.op2, self._get(ins.op1))
        elif fun == 0x1:
            self._set(ins.op2, self._get(ins.op1) + self._get(ins.op2))
        elif fun == 0x2:
            self._set(ins.op2, self._get(ins.op1) & self._get(ins.op2))
        elif fun == 0x3:
            self._set(ins.op2, self._get(ins.op2) + 1)
        elif fun == 0x4:
            self._set(ins.op2, self._get(ins.op2) + 4)
        elif fun == 0x5:
            self._set(ins.op2, self._get(ins.op2) - 1)
        elif fun == 0x6:
            self._set(ins.op2, self._get(ins.op2) - 4)
        elif fun == 0x7:
            self._set(ins.op2, ~self._get(ins.op2))
        elif fun == 0xF:
            self._set(ins.op2, self.pc + (ins.op1 << 1))
        else:
            self._say(
                f"Illegal ALU instruction: pc=0x{self.pc & 0xFFFFFFFF:x} fun=0x{fun:x}"
            )

    def _system(self, call: int) -> bool:
        if call == 0:
            fd, address, count = self.registers[0], self.registers[1], self.registers[2]
            try:
                if count < 0:
                    raise OSError("negative count")
                self._check_range(address, count)
                data = os.read(fd, count)
                self.memory[address:address + len(data)] = data
                self.registers[0] = len(data)
            except OSError:
                self.registers[0] = -1
            return not self.halt_on_read
        if call == 1:
            fd, address, count = self.registers[0], self.registers[1], self.registers[2]
            try:
                if count < 0:
                    raise OSError("negative count")
                self._check_range(address, count)
                self.registers[0] = _s32(os.write(fd, bytes(self.memory[address:address + count])))
            except OSError:
                self.registers[0] = -1
        elif call == 2:
            start, size = self.registers[0], self.registers[1]
            self._check_range(start, max(size, 0))
            text = bytes(self.memory[start:start + max(size, 0)]).split(b"\0", 1)[0]
            command = text.decode("latin-1")
            if os.environ.get(EXEC_ENV) == "1":
                result = subprocess.run(command, shell=True)
                code = result.returncode
                self.registers[0] = _s32(code << 8 if code >= 0 else -code)
            else:
                self._say(f"<<<WOULD EXECUTE {command}>>>")
        return True

    def step(self) -> bool:
        """Fetch and execute one instruction."""
        return self.execute(self.fetch())

    def run(self) -> int:
        """Run until the machine halts; return the number of instructions executed."""
        steps = 1
        while self.step():
            steps += 1
        return steps

    # -- reporting ---------------------------------------------------------

    def memory_lines(self, start: int, count: int) -> List[str]:
        """Format ``count`` words of memory starting at ``start``."""
        lines = []
        for address in range(start, start + count * 4, 4):
            self._check_range(address, 4)
            b = self.memory[address:address + 4]
            lines.append(
                f"0x{address:08x}: {b[0]:02x} {b[1]:02x} {b[2]:02x} {b[3]:02x}"
            )
        return lines

    def register_lines(self) -> List[str]:
        """Format every register in hex and decimal."""
        return [
            f"r{index}: 0x{value & 0xFFFFFFFF:08x} ({value})"
            for index, value in enumerate(self.registers)
        ]


@dataclass
class Options:
    """Command-line options of the simulator."""

    filename: str
    start_pc: Optional[int] = None
    show_memory: List[Tuple[int, int]] = field(default_factory=list)
    show_registers: bool = False


def parse_args(argv) -> Options:
    """Parse command-line arguments (without the program name); raise ValueError on misuse."""
    args = list(argv)
    if not args:
        raise ValueError("missing file name")
    options = Options(filename=args[-1])
    last = len(args) - 1
    items = iter(enumerate(args))
    for index, arg in items:
        if arg.startswith("-"):
            op = arg[1:]
            if op == "p":
                value = next(items, (None, None))[1]
                if value is None:
                    raise ValueError("-p needs a value")
                options.start_pc = _strtol16(value)
            elif op == "m":
                value = next(items, (None, None))[1]
                if value is None or ":" not in value:
                    raise ValueError("-m needs addr:count")
                address, count = value.split(":", 1)
                options.show_memory.append((_strtol16(address), _strtol16(count)))
            elif op == "r":
                options.show_registers = True
            else:
                raise ValueError(f"unknown option {arg}")
        elif index != last:
            raise ValueError(f"unexpected argument {arg}")
    return options


def main(argv=None) -> int:
    """Run a program file on the simulator and print what was asked for."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = parse_args(args)
    except ValueError:
        print(USAGE, file=sys.stderr)
        return 1
    machine = Machine()
    if options.start_pc is not None:
        machine.pc = options.start_pc
    try:
        machine.load_file(options.filename)
    except (OSError, ValueError, MachineError):
        print("error reading input file", file=sys.stderr)
        return 1
    try:
        machine.run()
        for start, count in options.show_memory:
            for line in machine.memory_lines(start, count):
                print(line)
    except MachineError as error:
        print(error, file=sys.stderr)
        return 1
    if options.show_registers:
        for line in machine.register_lines():
            print(line)
    return 0