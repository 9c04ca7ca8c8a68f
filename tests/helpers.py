"""Test data helpers."""


def numbered_lines(count: int, template: str = "fn function_{i}() {{}}") -> str:
    """Source-like text with one numbered line per entry."""
    return "\n".join(template.format(i=i) for i in range(count))
