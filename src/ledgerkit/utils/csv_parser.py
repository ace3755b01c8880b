"""Tolerant CSV tokenizer for accounting software exports."""

BOM = "\ufeff"
QUOTE = '"'
DELIMITER = ","

Row = tuple[str, ...]


def parse_csv(content: str) -> list[Row]:
    """Split CSV text into rows of trimmed fields.

    Handles:
    - a leading byte-order marker
    - quoted fields containing commas
    - doubled quotes ("") inside quoted fields
    - blank lines (dropped)

    Lines are split on line feeds only, before quote tracking, so a quoted field
    cannot span several physical lines. Malformed input never raises; an
    unterminated quote simply swallows the rest of its line into the current
    field.

    Args:
        content: Raw CSV text

    Returns:
        List of rows, each a tuple of field strings
    """
    if content.startswith(BOM):
        content = content[len(BOM):]

    rows = []
    for line in content.split("\n"):
        if not line.strip():
            continue
        rows.append(_split_line(line))
    return rows


def _split_line(line: str) -> Row:
    """Split one physical line into fields."""
    fields = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < len(line) and line[i + 1] == QUOTE:
                # Escaped quote
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == DELIMITER and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return tuple(fields)
