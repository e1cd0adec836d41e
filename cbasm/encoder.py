"""
Instruction encoder.

Encodes decoded commands into 32-bit machine words. Fields, high to low:

    Compute: [tag(3)=000 | WS(1)=1 | ALUop(5) | rs1(5) | rs2(5) | 0(8)      | rd(5)]
    Branch:  [tag(3)=010 | WS(1)=0 | ALUop(5) | rs1(5) | rs2(5) | offset(8) | 0(5)]
    Jump:    [tag(3)=100 | WS(1)=0 | ALUop(5) | 0(5)   | 0(5)   | offset(8) | 0(5)]

Offsets are signed 8-bit two's complement, counted in instructions.
LI, CIN and COUT have no layout yet.
"""

import logging
from typing import Iterable, List

from .errors import (
    AssemblerError,
    AssemblyErrors,
    EncodingError,
    InvalidNumericOperandError,
    InvalidRegisterError,
    UnsupportedInstructionError,
)
from .instructions import Category
from .parser import Command

logger = logging.getLogger(__name__)

WORD_BITS = 32
BYTE_BITS = 8
REG_BITS = 5

# Class tags, bits [31:29]
TAG_COMPUTE = 0b000
TAG_BRANCH = 0b010
TAG_JUMP = 0b100

# Field positions (low bit of each field)
TAG_SHIFT = 29
WS_SHIFT = 28
ALUOP_SHIFT = 23
RS1_SHIFT = 18
RS2_SHIFT = 13
OFFSET_SHIFT = 5
RD_SHIFT = 0


def check_immediate_range(value: int, bits: int, signed: bool = True, name: str = "immediate") -> None:
    """
    Check if an immediate value fits in the specified bit width.

    Args:
        value: The immediate value to check
        bits: Number of bits available
        signed: Whether the immediate is signed
        name: Name for error messages
    """
    if signed:
        min_val = -(1 << (bits - 1))
        max_val = (1 << (bits - 1)) - 1
    else:
        min_val = 0
        max_val = (1 << bits) - 1

    if not (min_val <= value <= max_val):
        raise InvalidNumericOperandError(
            f"{name} value {value} out of range [{min_val}, {max_val}] for {bits}-bit field"
        )


def to_byte_bits(value: int) -> List[int]:
    """
    Convert a signed 8-bit value to its two's-complement bits, MSB first.

    >>> to_byte_bits(-1)
    [1, 1, 1, 1, 1, 1, 1, 1]
    """
    check_immediate_range(value, BYTE_BITS, signed=True, name="offset")
    byte = value & 0xFF
    return [(byte >> (BYTE_BITS - 1 - i)) & 1 for i in range(BYTE_BITS)]


def bits_to_word(bits: Iterable[int]) -> int:
    """Pack MSB-first bits into an integer."""
    value = 0
    for bit in bits:
        value = (value << 1) | (bit & 1)
    return value


def word_to_bits(word: int) -> List[int]:
    """Split a 32-bit word into bits, MSB first."""
    return [(word >> (WORD_BITS - 1 - i)) & 1 for i in range(WORD_BITS)]


def _register(command: Command, position: int) -> int:
    operand = command.operands[position]
    if operand.value is None:
        raise EncodingError(f"Register operand '{operand.text}' was not normalized")
    if not 0 <= operand.value < (1 << REG_BITS):
        raise InvalidRegisterError(f"Register index {operand.value} out of range [0, 31]")
    return operand.value


def _offset(command: Command, position: int) -> int:
    operand = command.operands[position]
    if operand.value is None:
        raise EncodingError(f"Label operand '{operand.text}' was not resolved")
    # Range check happens inside the byte conversion
    return bits_to_word(to_byte_bits(operand.value))


def encode_compute(command: Command) -> int:
    """
    Encode a Compute instruction.

    Operands: rd, rs1, rs2
    """
    rd = _register(command, 0)
    rs1 = _register(command, 1)
    rs2 = _register(command, 2)

    encoding = TAG_COMPUTE << TAG_SHIFT
    encoding |= 1 << WS_SHIFT
    encoding |= (command.instruction.alu_op & 0x1F) << ALUOP_SHIFT
    encoding |= (rs1 & 0x1F) << RS1_SHIFT
    encoding |= (rs2 & 0x1F) << RS2_SHIFT
    encoding |= (rd & 0x1F) << RD_SHIFT
    return encoding


def encode_branch(command: Command) -> int:
    """
    Encode a Branch instruction.

    Operands: rs1, rs2, label
    """
    rs1 = _register(command, 0)
    rs2 = _register(command, 1)
    offset = _offset(command, 2)

    encoding = TAG_BRANCH << TAG_SHIFT
    encoding |= (command.instruction.alu_op & 0x1F) << ALUOP_SHIFT
    encoding |= (rs1 & 0x1F) << RS1_SHIFT
    encoding |= (rs2 & 0x1F) << RS2_SHIFT
    encoding |= (offset & 0xFF) << OFFSET_SHIFT
    return encoding


def encode_jump(command: Command) -> int:
    """
    Encode a Jump instruction.

    Operands: label
    """
    offset = _offset(command, 0)

    encoding = TAG_JUMP << TAG_SHIFT
    encoding |= (command.instruction.alu_op & 0x1F) << ALUOP_SHIFT
    encoding |= (offset & 0xFF) << OFFSET_SHIFT
    return encoding


_ENCODERS = {
    Category.COMPUTE: encode_compute,
    Category.BRANCH: encode_branch,
    Category.JUMP: encode_jump,
}


def is_supported(command: Command) -> bool:
    """Check whether a command's category has a word layout."""
    return command.category in _ENCODERS


def encode_command(command: Command) -> int:
    """
    Encode one command.

    Raises:
        UnsupportedInstructionError: If the category has no word layout
        InvalidNumericOperandError: If an offset or register does not fit
    """
    encoder = _ENCODERS.get(command.category)
    if encoder is None:
        raise UnsupportedInstructionError(
            f"No encoding defined for {command.mnemonic.value}",
            command.line_num,
            command.text,
            command.index,
        )

    try:
        return encoder(command)
    except AssemblerError as e:
        raise type(e)(e.reason, command.line_num, command.text, command.index) from e


def encode_commands(commands: Iterable[Command], skip_unsupported: bool = False) -> List[int]:
    """
    Encode a sequence of commands into words, in order.

    Args:
        commands: Decoded commands
        skip_unsupported: Omit commands with no word layout instead of failing

    Returns:
        List of 32-bit words

    Raises:
        AssemblyErrors: If any command could not be encoded
    """
    words = []
    errors = []

    for command in commands:
        if skip_unsupported and not is_supported(command):
            logger.warning(
                "Line %d: skipping %s, no encoding defined", command.line_num, command.mnemonic.value
            )
            continue

        try:
            word = encode_command(command)
        except AssemblerError as e:
            errors.append(e)
            continue

        logger.debug("#%d: %08X  %s", command.index, word, command)
        words.append(word)

    if errors:
        raise AssemblyErrors(errors)

    return words
