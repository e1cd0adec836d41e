"""
Assembly source parser (decoder).

Turns source text into an ordered list of typed, label-resolved commands in
three passes:

1. Tokenize and classify every line (comments, labels, instructions) and
   materialize operands according to the mnemonic's signature.
2. Resolve label operands to signed displacements counted in instructions.
3. Normalize register operands to their numeric index.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import (
    AssemblerError,
    ArgCountError,
    AssemblyErrors,
    DuplicateLabelError,
    InvalidNumericOperandError,
    InvalidRegisterError,
    ParseError,
    UnknownMnemonicError,
    UnresolvedLabelError,
)
from .instructions import Category, Instruction, Mnemonic, OperandKind, get_instruction
from .registers import parse_register

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"
LABEL_SUFFIX = ":"
DECIMAL_RE = re.compile(r"[+-]?[0-9]+")

# Signed 8-bit range of the constant field
CONSTANT_MIN = -128
CONSTANT_MAX = 127


@dataclass
class Operand:
    """
    A single instruction operand.

    Attributes:
        kind: Operand kind taken from the mnemonic's signature
        text: Operand token as written in the source
        value: Register index, constant, or label displacement once known
    """

    kind: OperandKind
    text: str
    value: Optional[int] = None


@dataclass
class Command:
    """
    A decoded instruction.

    Attributes:
        text: Source line with the comment removed
        instruction: Instruction definition for the mnemonic
        operands: Operands in source order
        index: Sequence index (position among real instructions, from 0)
        line_num: 1-based line number in the source
    """

    text: str
    instruction: Instruction
    operands: List[Operand] = field(default_factory=list)
    index: int = 0
    line_num: int = 0

    @property
    def mnemonic(self) -> Mnemonic:
        return self.instruction.mnemonic

    @property
    def category(self) -> Category:
        return self.instruction.category

    @property
    def has_label(self) -> bool:
        return self.instruction.has_label

    def __str__(self) -> str:
        parts = [self.mnemonic.value] + [op.text for op in self.operands]
        return " ".join(parts)


@dataclass
class Label:
    """A label definition: name and the index of the instruction it marks."""

    name: str
    index: int
    line_num: int = 0


def strip_comments(line: str) -> str:
    """Remove everything from the first comment marker onward."""
    comment_pos = line.find(COMMENT_MARKER)
    if comment_pos >= 0:
        return line[:comment_pos]
    return line


def parse_immediate(value_str: str) -> int:
    """
    Parse a signed base-10 immediate value from string.

    Accepts an optional single sign followed by ASCII digits: 123, -45, +7.

    Returns:
        Integer value
    """
    value_str = value_str.strip()

    if not value_str:
        raise InvalidNumericOperandError("Empty immediate value")

    if not DECIMAL_RE.fullmatch(value_str):
        raise InvalidNumericOperandError(f"Invalid immediate value: {value_str}")

    return int(value_str, 10)


def is_label_line(line: str) -> bool:
    """Check whether a comment-free line defines a label."""
    return line.rstrip().endswith(LABEL_SUFFIX)


def parse_label_name(line: str) -> str:
    """Extract a label name: colon and all whitespace are removed."""
    return "".join(line.replace(LABEL_SUFFIX, "").split())


def tokenize(line: str) -> List[str]:
    """
    Split an instruction line into tokens.

    Commas are operand separators equivalent to whitespace.
    """
    return line.replace(",", " ").split()


class Parser:
    """
    Assembly parser.

    Collects per-instruction errors over all passes and raises them together
    as ``AssemblyErrors`` once parsing is finished.
    """

    def __init__(self):
        self.commands: List[Command] = []
        self.labels: Dict[str, Label] = {}
        self.errors: List[AssemblerError] = []

    def parse_file(self, filepath: str) -> List[Command]:
        """
        Parse an assembly file.

        Args:
            filepath: Path to the assembly file

        Returns:
            List of Command objects
        """
        with open(filepath, "r", encoding="utf-8", errors="replace") as f:
            content = f.read()
        return self.parse_string(content)

    def parse_string(self, content: str) -> List[Command]:
        """
        Parse assembly source from a string.

        Args:
            content: Assembly source code string

        Returns:
            List of Command objects, labels resolved and registers normalized

        Raises:
            AssemblyErrors: If any line failed to parse
        """
        self.commands = []
        self.labels = {}
        self.errors = []

        self._scan(content)
        self._resolve_labels()
        self._normalize_registers()

        if self.errors:
            self.errors.sort(key=lambda e: e.line_num or 0)
            raise AssemblyErrors(self.errors)

        return self.commands

    def _error(self, exc: AssemblerError) -> None:
        logger.debug("Collected error: %s", exc)
        self.errors.append(exc)

    # -------------------------------------------------------------------------
    # Pass 1: tokenize and classify
    # -------------------------------------------------------------------------

    def _scan(self, content: str) -> None:
        logger.debug("Pass 1: scanning %d lines", len(content.splitlines()))
        instruction_cnt = 0

        for line_num, raw in enumerate(content.splitlines(), start=1):
            line = strip_comments(raw).rstrip()
            if not line.strip():
                continue

            if is_label_line(line):
                self._define_label(line, instruction_cnt, line_num)
                continue

            try:
                command = self._decode_command(line, instruction_cnt, line_num)
            except AssemblerError as e:
                self._error(e)
            else:
                self.commands.append(command)
                logger.debug("Pass 1: #%d %s", command.index, command)
            instruction_cnt += 1

    def _define_label(self, line: str, index: int, line_num: int) -> None:
        name = parse_label_name(line)
        if not name:
            self._error(ParseError("Empty label name", line_num, line))
            return

        if name in self.labels:
            first = self.labels[name]
            self._error(
                DuplicateLabelError(
                    f"Duplicate label '{name}' (first defined on line {first.line_num})",
                    line_num,
                    line,
                )
            )
            return

        self.labels[name] = Label(name=name, index=index, line_num=line_num)
        logger.debug("Pass 1: label '%s' at #%d", name, index)

    def _decode_command(self, line: str, index: int, line_num: int) -> Command:
        tokens = tokenize(line)
        if not tokens:
            raise ParseError("Missing instruction mnemonic", line_num, line, index)
        mnemonic, args = tokens[0], tokens[1:]

        instr = get_instruction(mnemonic)
        if instr is None:
            raise UnknownMnemonicError(
                f"Unknown instruction: {mnemonic}", line_num, line, index
            )

        if len(args) != instr.arity:
            raise ArgCountError(
                f"{instr.mnemonic.value} requires {instr.arity} operand(s), got {len(args)}",
                line_num,
                line,
                index,
            )

        operands = []
        for kind, text in zip(instr.operands, args):
            operand = Operand(kind=kind, text=text)
            if kind == OperandKind.CONSTANT:
                operand.value = self._parse_constant(text, line_num, line, index)
            operands.append(operand)

        return Command(
            text=line.strip(),
            instruction=instr,
            operands=operands,
            index=index,
            line_num=line_num,
        )

    @staticmethod
    def _parse_constant(text: str, line_num: int, line: str, index: int) -> int:
        try:
            value = parse_immediate(text)
        except InvalidNumericOperandError as e:
            raise InvalidNumericOperandError(e.reason, line_num, line, index)

        if not CONSTANT_MIN <= value <= CONSTANT_MAX:
            raise InvalidNumericOperandError(
                f"Constant {value} out of range [{CONSTANT_MIN}, {CONSTANT_MAX}]",
                line_num,
                line,
                index,
            )
        return value

    # -------------------------------------------------------------------------
    # Pass 2: label resolution
    # -------------------------------------------------------------------------

    def find_label(self, name: str) -> Optional[Label]:
        """Look up a label by name; None if it is not defined."""
        return self.labels.get(name)

    def _resolve_labels(self) -> None:
        logger.debug("Pass 2: resolving %d label(s)", len(self.labels))

        for command in self.commands:
            if not command.has_label:
                continue

            for operand in command.operands:
                if operand.kind != OperandKind.LABEL:
                    continue

                label = self.find_label(operand.text)
                if label is not None:
                    operand.value = label.index - command.index
                    logger.debug(
                        "Pass 2: #%d '%s' -> %+d", command.index, label.name, operand.value
                    )
                    continue

                # A numeric target is a literal displacement
                try:
                    operand.value = parse_immediate(operand.text)
                except InvalidNumericOperandError:
                    self._error(
                        UnresolvedLabelError(
                            f"Undefined label: {operand.text}",
                            command.line_num,
                            command.text,
                            command.index,
                        )
                    )

    # -------------------------------------------------------------------------
    # Pass 3: register normalization
    # -------------------------------------------------------------------------

    def _normalize_registers(self) -> None:
        for command in self.commands:
            for operand in command.operands:
                if operand.kind != OperandKind.REGISTER:
                    continue
                try:
                    operand.value = parse_register(operand.text)
                except ValueError as e:
                    self._error(
                        InvalidRegisterError(
                            str(e), command.line_num, command.text, command.index
                        )
                    )


def decode(source: str) -> List[Command]:
    """Parse source text into resolved commands."""
    return Parser().parse_string(source)
