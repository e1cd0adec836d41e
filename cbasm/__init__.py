"""
cbasm - A two-stage assembler for a small 32-bit RISC instruction set.

Source text is decoded into label-resolved commands, then each command is
encoded into one 32-bit machine word.
"""

__version__ = "1.0.0"

from .assembler import Assembler
from .encoder import encode_command, encode_commands
from .errors import AssemblerError, AssemblyErrors, EncodingError, ParseError, SymbolError
from .parser import Parser, decode

__all__ = [
    "Assembler",
    "AssemblerError",
    "AssemblyErrors",
    "EncodingError",
    "ParseError",
    "SymbolError",
    "Parser",
    "decode",
    "encode_command",
    "encode_commands",
]
