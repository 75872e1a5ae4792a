"""Best-icon selection heuristic.

Community icon sets ship several style variants per technology (original,
plain, line, wordmark...). The heuristic picks one file per technology with a
strict priority cascade, first match wins:

1. filename contains "original" (case-insensitive)
2. filename without a lowercase .svg suffix equals the technology name (case-insensitive)
3. filename contains "plain" (case-insensitive)
4. first candidate in traversal order

Within a rule the earliest candidate in traversal order wins. Only the base
filename is inspected, never the directory part of the path.
"""

import os


SVG_SUFFIX = '.svg'

RULE_ORIGINAL = 'original'
RULE_EXACT_NAME = 'exact_name'
RULE_PLAIN = 'plain'
RULE_FIRST = 'first'


def _stem(filename: str) -> str:
    if filename.endswith(SVG_SUFFIX):
        return filename[: -len(SVG_SUFFIX)]
    return filename


def explain_selection(svg_files: list[str], tech_name: str) -> tuple[str | None, str | None]:
    """Pick the best candidate and report which rule picked it.

    Args:
        svg_files: Candidate paths in traversal order
        tech_name: Technology name the icon is extracted for

    Returns:
        (selected_path, rule) or (None, None) when there are no candidates
    """
    names = [os.path.basename(path) for path in svg_files]
    tech_lower = tech_name.lower()

    for path, name in zip(svg_files, names):
        if 'original' in name.lower():
            return path, RULE_ORIGINAL

    for path, name in zip(svg_files, names):
        if _stem(name).lower() == tech_lower:
            return path, RULE_EXACT_NAME

    for path, name in zip(svg_files, names):
        if 'plain' in name.lower():
            return path, RULE_PLAIN

    if svg_files:
        return svg_files[0], RULE_FIRST

    return None, None


def select_best_svg(svg_files: list[str], tech_name: str) -> str | None:
    """Return the path the heuristic selects, or None for an empty candidate set."""
    selected, _ = explain_selection(svg_files, tech_name)
    return selected
