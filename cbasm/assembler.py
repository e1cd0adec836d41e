"""
Main assembler implementation.

Runs the decoder and the encoder back to back and renders the resulting words.
"""

import logging
from typing import Dict, List, Tuple

from .parser import Command, Label, Parser
from .encoder import encode_commands, is_supported, word_to_bits

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("hex", "bin")


def format_hex(word: int) -> str:
    """Render a word as 0x-prefixed, 8-digit hex."""
    return f"0x{word:08x}"


def format_binary(word: int, group: int = 4) -> str:
    """Render a word as 32 binary digits, grouped and separated by dots."""
    bits = "".join(str(b) for b in word_to_bits(word))
    return ".".join(bits[i:i + group] for i in range(0, len(bits), group))


class Assembler:
    """
    Two-stage assembler.

    Stage 1: Decode source into label-resolved commands
    Stage 2: Encode each command into a 32-bit word
    """

    def __init__(self, verbose: bool = False, skip_unsupported: bool = False):
        """
        Initialize the assembler.

        Args:
            verbose: If True, log detailed assembly information
            skip_unsupported: If True, leave out instructions that have no
                encoding instead of failing
        """
        self.verbose = verbose
        self.skip_unsupported = skip_unsupported
        self.parser = Parser()
        self.commands: List[Command] = []
        self.instructions: List[int] = []  # encoded 32-bit words
        self.source_map: List[Tuple[Command, int]] = []  # (command, word)

    @property
    def labels(self) -> Dict[str, Label]:
        return self.parser.labels

    def log(self, message: str) -> None:
        """Log message if verbose mode is enabled."""
        if self.verbose:
            logger.info(message)

    def assemble_file(self, input_path: str, output_path: str = None, fmt: str = "hex") -> List[int]:
        """
        Assemble an assembly file.

        Args:
            input_path: Path to input source file
            output_path: Path to output file (optional)
            fmt: Output format, "hex" or "bin"

        Returns:
            List of 32-bit encoded instructions
        """
        self._reset()
        self.log(f"Assembling: {input_path}")
        commands = self.parser.parse_file(input_path)
        self._encode(commands)

        if output_path:
            self.write_output(output_path, fmt)
            self.log(f"Output written to: {output_path}")

        return self.instructions

    def assemble_string(self, source: str) -> List[int]:
        """
        Assemble from a string.

        Args:
            source: Assembly source code

        Returns:
            List of 32-bit encoded instructions
        """
        self._reset()
        commands = self.parser.parse_string(source)
        self._encode(commands)
        return self.instructions

    def _reset(self) -> None:
        self.commands = []
        self.instructions = []
        self.source_map = []

    def _encode(self, commands: List[Command]) -> None:
        self.log(f"Decoded {len(commands)} instruction(s), {len(self.labels)} label(s)")
        for label in self.labels.values():
            self.log(f"  Label '{label.name}' at #{label.index}")

        words = encode_commands(commands, skip_unsupported=self.skip_unsupported)

        encoded = [c for c in commands if not self.skip_unsupported or is_supported(c)]
        self.commands = commands
        self.instructions = words
        self.source_map = list(zip(encoded, words))
        for command, word in self.source_map:
            self.log(f"  #{command.index:03d}: {word:08X}  {command}")

        self.log(f"Total words: {len(self.instructions)}")

    def render(self, fmt: str = "hex") -> str:
        """Render the assembled words in the given output format."""
        if fmt == "hex":
            return self.get_hex_string()
        if fmt == "bin":
            return self.get_binary_string()
        raise ValueError(f"Unknown output format: {fmt} (expected one of {', '.join(OUTPUT_FORMATS)})")

    def write_output(self, output_path: str, fmt: str = "hex") -> None:
        """
        Write assembled instructions to a file, one word per line.

        Args:
            output_path: Path to output file
            fmt: Output format, "hex" or "bin"
        """
        text = self.render(fmt)
        with open(output_path, "w", encoding="utf-8") as f:
            if text:
                f.write(text + "\n")

    def get_hex_string(self) -> str:
        """Get assembled instructions as hex, one word per line."""
        return "\n".join(format_hex(word) for word in self.instructions)

    def get_binary_string(self) -> str:
        """Get assembled instructions as dotted binary, one word per line."""
        return "\n".join(format_binary(word) for word in self.instructions)

    def get_listing(self) -> str:
        """
        Get an assembly listing showing indices, encodings, and source.

        Returns:
            Formatted listing string
        """
        lines = []
        lines.append("Index  Code       Source")
        lines.append("-" * 60)

        for command, word in self.source_map:
            lines.append(f"{command.index:5d}  {word:08X}   {command.text}")

        return "\n".join(lines)
