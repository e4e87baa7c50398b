"""Pytest configuration for the rjs test suite."""

import sys
from pathlib import Path

# Add the project root to the path so `rjs` imports without installation
sys.path.insert(0, str(Path(__file__).parent.parent))


def parse_test_file(path: Path) -> list[tuple[str, str, str]]:
    """Parse a .tests file into (name, input, expected) tuples.

    Format:

        === test name
        source text
        ---
        expected output, or error:LINE:COL: message
        ---
    """
    lines = path.read_text(encoding="utf-8").split("\n")
    result: list[tuple[str, str, str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            test_input = "\n".join(input_lines)
            expected = "\n".join(expected_lines).strip("\n")
            result.append((test_name, test_input, expected))
        else:
            i += 1
    return result
