"""
Tests for the instruction table.
"""

import pytest

from cbasm.instructions import (
    INSTRUCTIONS,
    Category,
    Mnemonic,
    OperandKind,
    get_all_mnemonics,
    get_instruction,
    is_valid_instruction,
)

COMPUTE = ["add", "sub", "xor", "or", "and", "sra", "sll", "srl", "slts", "sltu"]
BRANCH = ["blt", "bltu", "bge", "bgeu", "beq", "bne"]

ALU_OPS = {
    "add": 0b00000,
    "sub": 0b01000,
    "xor": 0b00100,
    "or": 0b00110,
    "and": 0b00111,
    "sra": 0b01101,
    "sll": 0b00001,
    "srl": 0b00101,
    "slts": 0b00010,
    "sltu": 0b00011,
    "blt": 0b11100,
    "bltu": 0b11110,
    "bge": 0b11101,
    "bgeu": 0b11111,
    "beq": 0b11000,
    "bne": 0b11001,
    "j": 0b00000,
}


class TestInstructionTable:
    """Tests for the per-mnemonic signature table."""

    def test_every_mnemonic_defined(self):
        """Every enumerated mnemonic has a table entry."""
        assert set(INSTRUCTIONS) == set(Mnemonic)
        assert len(get_all_mnemonics()) == 20

    def test_entries_match_keys(self):
        for mnemonic, instr in INSTRUCTIONS.items():
            assert instr.mnemonic is mnemonic

    @pytest.mark.parametrize("name", COMPUTE)
    def test_compute_signature(self, name):
        instr = get_instruction(name)
        assert instr.category == Category.COMPUTE
        assert instr.operands == (OperandKind.REGISTER,) * 3
        assert not instr.has_label

    @pytest.mark.parametrize("name", BRANCH)
    def test_branch_signature(self, name):
        instr = get_instruction(name)
        assert instr.category == Category.BRANCH
        assert instr.operands == (OperandKind.REGISTER, OperandKind.REGISTER, OperandKind.LABEL)
        assert instr.has_label

    def test_li_signature(self):
        instr = get_instruction("li")
        assert instr.category == Category.LOAD_IMMEDIATE
        assert instr.operands == (OperandKind.REGISTER, OperandKind.CONSTANT)
        assert instr.alu_op is None

    def test_jump_signature(self):
        instr = get_instruction("j")
        assert instr.category == Category.JUMP
        assert instr.operands == (OperandKind.LABEL,)
        assert instr.arity == 1
        assert instr.has_label

    @pytest.mark.parametrize("name", ["cin", "cout"])
    def test_io_signature(self, name):
        instr = get_instruction(name)
        assert instr.category == Category.INPUT_OUTPUT
        assert instr.arity == 0
        assert not instr.has_label

    @pytest.mark.parametrize("name, alu_op", sorted(ALU_OPS.items()))
    def test_alu_op_codes(self, name, alu_op):
        assert get_instruction(name).alu_op == alu_op


class TestLookup:
    """Tests for mnemonic lookup."""

    def test_case_insensitive(self):
        assert get_instruction("ADD") is get_instruction("add")
        assert is_valid_instruction("Beq")

    def test_unknown(self):
        assert get_instruction("addi") is None
        assert not is_valid_instruction("nop")
