"""Coverage decoder for CODECOV line-level coverage entries.

Each entry carries two compact encodings:

- hits: a bitmap string; every character ``c`` with ``ord(c) <= 80`` holds
  four line outcomes in ``ord(c) - 65`` (bit 8 = current index, then 4, 2,
  1 for the next three). ``A`` (zero) skips four indices. Characters above
  ``P`` carry no data and are skipped without moving the cursor.
- lines: the active line numbers. Plain digits are cumulative deltas, each
  one producing a line. ``#`` starts an absolute number whose digits
  concatenate until ``,`` ``+`` or the next ``#``. ``+`` always closes the
  current absolute number.

The i-th active line is executed when index ``i`` appears in the decoded
hits. The join is positional, never by line value.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from itest.core.errors import CoverageError
from itest.testing.coverage.models import CoverageLine
from itest.testing.models import CoverageLevel

_HIT_BASE = 65  # "A"
_HIT_MAX = 80  # "P"
_HIT_BITS = (8, 4, 2, 1)


def decode_hits(hits: str, total_lines: int) -> list[int]:
    """Return the zero-based indices recorded as executed.

    No index is ever ``>= total_lines``.
    """
    executed: list[int] = []
    line_index = 0
    for char in hits:
        if line_index >= total_lines:
            break
        code = ord(char)
        if code > _HIT_MAX:
            continue

        value = code - _HIT_BASE
        if value == 0:
            line_index += 4
            continue

        for bit in _HIT_BITS:
            if value & bit and line_index < total_lines:
                executed.append(line_index)
            line_index += 1

    return executed


def decode_line_spec(spec: str) -> list[int]:
    """Return active line numbers in encoded order.

    Raises:
        CoverageError: On a character that is not part of the encoding.
    """
    line_numbers: list[int] = []
    line = 0
    current = ""
    concat = False

    for char in spec:
        if char == "#":
            if current:
                line = _to_line(current, spec)
                line_numbers.append(line)
            concat = True
            line = 0
            current = ""
        elif char == ",":
            if current:
                line = _to_line(current, spec)
                line_numbers.append(line)
            current = ""
        elif char == "+":
            # An empty absolute number closes as line 0
            line = _to_line(current, spec) if current else 0
            line_numbers.append(line)
            concat = False
        elif concat:
            current += char
        else:
            if not char.isdigit():
                raise CoverageError.parse_error(f"Unexpected {char!r} in line specification")
            current = ""
            line += int(char)
            line_numbers.append(line)

    return line_numbers


def _to_line(value: str, spec: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise CoverageError.parse_error(
            f"Invalid absolute line {value!r} in line specification {spec!r}"
        ) from e


def decode(line_spec: str, hits: str, total_lines: int) -> tuple[list[int], set[int]]:
    """Decode both encodings: (active line numbers, executed indices)."""
    return decode_line_spec(line_spec), set(decode_hits(hits, total_lines))


def resolve_procedure_name(
    line_number: int,
    procedures: Mapping[int, str] | None,
    signatures: Sequence[str],
) -> str | None:
    """Name the procedure an active line stands for under ``*PROC`` coverage.

    ``procedures`` maps zero-based start lines to procedure names. The file's
    first line falls back to the first declared signature.
    """
    if procedures is None:
        return None
    zero_based = line_number - 1
    name = procedures.get(zero_based)
    if name is None and zero_based == 0 and signatures:
        name = signatures[0]
    return name


def build_active_lines(
    line_numbers: Iterable[int],
    executed_indexes: set[int],
    level: CoverageLevel = "*LINE",
    procedures: Mapping[int, str] | None = None,
    signatures: Sequence[str] = (),
) -> dict[int, CoverageLine]:
    """Join active line numbers with executed indices by position."""
    active_lines: dict[int, CoverageLine] = {}
    for index, line_number in enumerate(line_numbers):
        name = None
        if level == "*PROC":
            name = resolve_procedure_name(line_number, procedures, signatures)
        active_lines[line_number] = CoverageLine(executed=index in executed_indexes, name=name)
    return active_lines


def percent_ran(active_lines: Mapping[int, CoverageLine]) -> str:
    """Rounded percentage of executed active lines. No active lines is "0"."""
    if not active_lines:
        return "0"
    covered = sum(1 for line in active_lines.values() if line.executed)
    return str(int(covered / len(active_lines) * 100 + 0.5))
