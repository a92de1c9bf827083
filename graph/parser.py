"""Graph text parsing for adjacency-list and adjacency-matrix input

Adjacency list, one node per line:

    0: 1,2
    1: 3
    2: 3
    3: 4
    4:

Adjacency matrix, header row of node ids then one row per node:

      0 1 2
    0 0 1 0
    1 0 0 1
    2 0 0 0

Blank input parses to an empty graph; rejecting it is the caller's job
(see sorting.run_sort).
"""

from .enums import InputMode
from .types import Graph

SAMPLE_INPUTS: dict[str, str] = {
    InputMode.LIST.value: "0: 1,2\n1: 3\n2: 3\n3: 4\n4:",
    InputMode.MATRIX.value: (
        "  0 1 2 3 4\n"
        "0 0 1 1 0 0\n"
        "1 0 0 0 1 0\n"
        "2 0 0 0 1 0\n"
        "3 0 0 0 0 1\n"
        "4 0 0 0 0 0"
    ),
}


class FormatError(ValueError):
    """Raised when graph text is malformed or declares a self-loop."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            message = f"Line {line}: {message}"
        super().__init__(message)


def parse(text: str, mode: InputMode | str = InputMode.LIST) -> Graph:
    """Parse raw graph text in the given mode.

    Args:
        text: Raw user input
        mode: "list" or "matrix"

    Returns:
        A validated Graph. Parsing the same text twice yields equal graphs
        with the same key order and successor order.

    Raises:
        FormatError: On malformed syntax, an unknown mode, or a self-loop
    """
    try:
        mode = InputMode(mode)
    except ValueError:
        raise FormatError(f"Unknown input mode '{mode}' (expected 'list' or 'matrix')") from None

    if mode == InputMode.LIST:
        return parse_adjacency_list(text)
    return parse_adjacency_matrix(text)


def _numbered_lines(text: str) -> list[tuple[int, str]]:
    """Non-blank lines, trimmed, with their 1-based line numbers."""
    return [
        (number, line.strip())
        for number, line in enumerate(text.splitlines(), 1)
        if line.strip()
    ]


def parse_adjacency_list(text: str) -> Graph:
    """Parse `<node>: <neighbor>,<neighbor>,...` lines."""
    declared: dict[str, tuple[str, ...]] = {}
    seen: dict[str, None] = {}  # insertion-ordered set of every identifier

    for number, line in _numbered_lines(text):
        node, sep, rest = line.partition(":")
        node = node.strip()
        if not sep:
            raise FormatError(f"expected '<node>: <neighbors>', got '{line}'", number)
        if not node:
            raise FormatError("missing node name before ':'", number)
        if node in declared:
            raise FormatError(f"node '{node}' is declared more than once", number)

        # Empty tokens (e.g. from a trailing comma) carry no edge
        neighbors = tuple(token.strip() for token in rest.split(",") if token.strip())
        for neighbor in neighbors:
            if ":" in neighbor:
                raise FormatError(f"neighbor '{neighbor}' contains ':'", number)
        if node in neighbors:
            raise FormatError(f"self-loop on node '{node}'", number)

        declared[node] = neighbors
        seen.setdefault(node)
        for neighbor in neighbors:
            seen.setdefault(neighbor)

    adjacency = dict(declared)
    for node in seen:
        adjacency.setdefault(node, ())
    return Graph(adjacency=adjacency)


def parse_adjacency_matrix(text: str) -> Graph:
    """Parse a header row of node ids followed by `<node> <bit> ...` rows.

    Rows shorter than the header are zero-padded; cells past the header
    width are ignored.
    """
    lines = _numbered_lines(text)
    if not lines:
        return Graph()
    if len(lines) < 2:
        raise FormatError("matrix needs a header line and at least one row")

    header_line, header = lines[0]
    columns = header.split()
    if len(set(columns)) != len(columns):
        raise FormatError("header lists a node more than once", header_line)

    adjacency: dict[str, list[str]] = {node: [] for node in columns}
    filled: set[str] = set()

    for number, line in lines[1:]:
        row_node, *cells = line.split()
        if row_node not in adjacency:
            raise FormatError(f"row node '{row_node}' is not in the header", number)
        if row_node in filled:
            raise FormatError(f"row for node '{row_node}' appears more than once", number)
        filled.add(row_node)

        for target, cell in zip(columns, cells):
            if cell not in ("0", "1"):
                raise FormatError(f"expected 0 or 1, got '{cell}'", number)
            if cell == "0":
                continue
            if target == row_node:
                raise FormatError(f"self-loop on node '{row_node}'", number)
            adjacency[row_node].append(target)

    return Graph(adjacency={node: tuple(targets) for node, targets in adjacency.items()})
