"""
Instruction set definitions.

This module defines the closed set of supported mnemonics together with their
operand signatures, instruction category and 5-bit ALUop code. The table is
the single source of truth for both the parser (arity and operand kinds) and
the encoder (category layout and ALUop field).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
from enum import Enum, auto


class Mnemonic(Enum):
    """Supported instruction mnemonics."""

    ADD = "add"
    SUB = "sub"
    XOR = "xor"
    OR = "or"
    AND = "and"
    SRA = "sra"
    SLL = "sll"
    SRL = "srl"
    SLTS = "slts"
    SLTU = "sltu"
    BLT = "blt"
    BLTU = "bltu"
    BGE = "bge"
    BGEU = "bgeu"
    BEQ = "beq"
    BNE = "bne"
    LI = "li"
    J = "j"
    CIN = "cin"
    COUT = "cout"


class Category(Enum):
    """Instruction categories, each with its own word layout."""

    COMPUTE = auto()  # Register-register ALU operations
    BRANCH = auto()  # Conditional PC-relative branches
    LOAD_IMMEDIATE = auto()  # Load constant into register
    INPUT_OUTPUT = auto()  # Console in/out pseudo-ops
    JUMP = auto()  # Unconditional PC-relative jump


class OperandKind(Enum):
    """Kinds of instruction operands."""

    NONE = auto()
    REGISTER = auto()
    CONSTANT = auto()
    LABEL = auto()


@dataclass(frozen=True)
class Instruction:
    """
    Definition of an instruction.

    Attributes:
        mnemonic: Mnemonic this definition belongs to
        category: Instruction category (selects the word layout)
        operands: Operand kinds, in source order
        alu_op: 5-bit ALUop field (None if the category has no layout)
    """

    mnemonic: Mnemonic
    category: Category
    operands: Tuple[OperandKind, ...]
    alu_op: Optional[int] = None

    @property
    def arity(self) -> int:
        return len(self.operands)

    @property
    def has_label(self) -> bool:
        """True if one of the operands is a label reference."""
        return OperandKind.LABEL in self.operands


_REG = OperandKind.REGISTER
_CONST = OperandKind.CONSTANT
_LABEL = OperandKind.LABEL

_COMPUTE_OPERANDS = (_REG, _REG, _REG)  # rd, rs1, rs2
_BRANCH_OPERANDS = (_REG, _REG, _LABEL)  # rs1, rs2, target


def _compute(mnemonic: Mnemonic, alu_op: int) -> Instruction:
    return Instruction(mnemonic, Category.COMPUTE, _COMPUTE_OPERANDS, alu_op)


def _branch(mnemonic: Mnemonic, alu_op: int) -> Instruction:
    return Instruction(mnemonic, Category.BRANCH, _BRANCH_OPERANDS, alu_op)


# =============================================================================
# Instruction table
# =============================================================================

INSTRUCTIONS = {
    # -------------------------------------------------------------------------
    # Compute (register-register): rd, rs1, rs2
    # -------------------------------------------------------------------------
    Mnemonic.ADD: _compute(Mnemonic.ADD, 0b00000),
    Mnemonic.SUB: _compute(Mnemonic.SUB, 0b01000),
    Mnemonic.XOR: _compute(Mnemonic.XOR, 0b00100),
    Mnemonic.OR: _compute(Mnemonic.OR, 0b00110),
    Mnemonic.AND: _compute(Mnemonic.AND, 0b00111),
    Mnemonic.SRA: _compute(Mnemonic.SRA, 0b01101),
    Mnemonic.SLL: _compute(Mnemonic.SLL, 0b00001),
    Mnemonic.SRL: _compute(Mnemonic.SRL, 0b00101),
    Mnemonic.SLTS: _compute(Mnemonic.SLTS, 0b00010),
    Mnemonic.SLTU: _compute(Mnemonic.SLTU, 0b00011),
    # -------------------------------------------------------------------------
    # Branch: rs1, rs2, label
    # -------------------------------------------------------------------------
    Mnemonic.BLT: _branch(Mnemonic.BLT, 0b11100),
    Mnemonic.BLTU: _branch(Mnemonic.BLTU, 0b11110),
    Mnemonic.BGE: _branch(Mnemonic.BGE, 0b11101),
    Mnemonic.BGEU: _branch(Mnemonic.BGEU, 0b11111),
    Mnemonic.BEQ: _branch(Mnemonic.BEQ, 0b11000),
    Mnemonic.BNE: _branch(Mnemonic.BNE, 0b11001),
    # -------------------------------------------------------------------------
    # Load immediate: rd, constant (no word layout yet)
    # -------------------------------------------------------------------------
    Mnemonic.LI: Instruction(Mnemonic.LI, Category.LOAD_IMMEDIATE, (_REG, _CONST)),
    # -------------------------------------------------------------------------
    # Jump: label
    # -------------------------------------------------------------------------
    Mnemonic.J: Instruction(Mnemonic.J, Category.JUMP, (_LABEL,), 0b00000),
    # -------------------------------------------------------------------------
    # Console I/O: no operands (no word layout yet)
    # -------------------------------------------------------------------------
    Mnemonic.CIN: Instruction(Mnemonic.CIN, Category.INPUT_OUTPUT, ()),
    Mnemonic.COUT: Instruction(Mnemonic.COUT, Category.INPUT_OUTPUT, ()),
}

_missing = set(Mnemonic) - set(INSTRUCTIONS)
if _missing:
    raise RuntimeError(f"Instruction table missing mnemonics: {sorted(m.value for m in _missing)}")


def get_instruction(mnemonic: str) -> Optional[Instruction]:
    """
    Look up an instruction by mnemonic.

    Args:
        mnemonic: Instruction mnemonic (case-insensitive)

    Returns:
        Instruction object if found, None otherwise
    """
    try:
        return INSTRUCTIONS[Mnemonic(mnemonic.lower())]
    except ValueError:
        return None


def is_valid_instruction(mnemonic: str) -> bool:
    """Check if a mnemonic is a valid instruction."""
    return get_instruction(mnemonic) is not None


def get_all_mnemonics() -> List[str]:
    """Get a list of all supported instruction mnemonics."""
    return [m.value for m in INSTRUCTIONS]
