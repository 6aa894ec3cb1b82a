"""
Plain-text table output for the demo CLI
"""
from typing import List, Sequence


def format_table(headers: Sequence[str], rows: List[Sequence[object]],
                 max_width: int = 40, gap: str = '   ') -> str:
    """Lay rows out in left-aligned columns

    Args:
        headers: Column headers
        rows: Row values, converted with ``str``
        max_width: Cells longer than this are cut with an ellipsis
        gap: Text between columns

    Returns:
        Table text, or an empty string when there are no rows
    """
    if not rows:
        return ''

    cells = [[_clip(str(value), max_width) for value in row] for row in rows]
    widths = [len(header) for header in headers]
    for row in cells:
        for i, cell in enumerate(row[:len(widths)]):
            widths[i] = max(widths[i], len(cell))

    lines = [gap.join(header.ljust(widths[i]) for i, header in enumerate(headers))]
    for row in cells:
        lines.append(gap.join(cell.ljust(widths[i]) for i, cell in enumerate(row[:len(widths)])))
    return '\n'.join(line.rstrip() for line in lines)


def _clip(text: str, max_width: int) -> str:
    if len(text) <= max_width:
        return text
    return text[:max_width - 3] + '...'
