"""
Custom exception types for the cbasm assembler.
"""

from typing import List, Optional


class AssemblerError(Exception):
    """Base exception for assembler errors."""

    def __init__(
        self,
        message: str,
        line_num: Optional[int] = None,
        line_text: Optional[str] = None,
        index: Optional[int] = None,
    ):
        self.reason = message
        self.line_num = line_num
        self.line_text = line_text
        self.index = index
        if line_num is not None:
            if line_text:
                message = f"Line {line_num}: {message}\n  {line_text.strip()}"
            else:
                message = f"Line {line_num}: {message}"
        super().__init__(message)


class ParseError(AssemblerError):
    """Exception raised for parsing errors."""

    pass


class EncodingError(AssemblerError):
    """Exception raised for instruction encoding errors."""

    pass


class SymbolError(AssemblerError):
    """Exception raised for symbol/label errors."""

    pass


class UnknownMnemonicError(ParseError):
    """First token of an instruction line is not a known mnemonic."""


class ArgCountError(ParseError):
    """Operand count does not match the mnemonic's arity."""


class InvalidRegisterError(ParseError):
    """Register operand is not x0..x31."""


class InvalidNumericOperandError(ParseError):
    """Constant or offset is malformed or does not fit its field."""


class UnresolvedLabelError(SymbolError):
    """Branch or jump names a label that is never defined."""


class DuplicateLabelError(SymbolError):
    """The same label name is defined more than once."""


class UnsupportedInstructionError(EncodingError):
    """Instruction has no bit layout yet (LI, CIN, COUT)."""


class AssemblyErrors(AssemblerError):
    """
    Several errors collected over one pass.

    Attributes:
        errors: The individual errors, in source order
    """

    def __init__(self, errors: List[AssemblerError]):
        self.errors = list(errors)
        lines = [f"{len(self.errors)} error(s):"]
        lines.extend(str(e) for e in self.errors)
        super().__init__("\n".join(lines))
