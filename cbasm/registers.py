"""
Register name normalization.

Registers are written as an ``x`` prefix followed by the register index
(x0-x31). Normalizing a register strips the prefix and keeps the index.
"""

REGISTER_PREFIX = "x"
NUM_REGISTERS = 32


def parse_register(name: str) -> int:
    """
    Parse a register name and return its number.

    Args:
        name: Register name (e.g., "x0", "X17")

    Returns:
        Register number (0-31)

    Raises:
        ValueError: If the register name is invalid
    """
    name_lower = name.lower().strip()
    if not name_lower.startswith(REGISTER_PREFIX):
        raise ValueError(f"Invalid register name: {name}")

    suffix = name_lower[len(REGISTER_PREFIX):]
    if not (suffix.isascii() and suffix.isdigit()):
        raise ValueError(f"Invalid register name: {name}")

    num = int(suffix, 10)
    if not 0 <= num < NUM_REGISTERS:
        raise ValueError(f"Register index out of range [0, {NUM_REGISTERS - 1}]: {name}")
    return num


def is_valid_register(name: str) -> bool:
    """Check if a string is a valid register name."""
    try:
        parse_register(name)
    except ValueError:
        return False
    return True


def get_register_name(num: int) -> str:
    """Get the name for a register number."""
    if not 0 <= num < NUM_REGISTERS:
        raise ValueError(f"Invalid register number: {num}")
    return f"{REGISTER_PREFIX}{num}"
