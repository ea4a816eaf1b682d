from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Union

Literal = Union[str, int, float, Decimal]


class ProbabilityParseError(ValueError):
    """A probability literal that is not a finite decimal number."""

    def __init__(self, literal, position: int):
        self.literal = literal
        self.position = position
        super().__init__(f"Invalid probability literal {literal!r} at position {position}")


def parse_probability(literal: Literal, position: int = 0) -> Decimal:
    """
    Converts one literal ("0.1", "1e-6", 1, Decimal(...)) into an exact Decimal.
    Floats go through repr() so 0.1 becomes Decimal("0.1") rather than the
    binary expansion.
    """
    if isinstance(literal, bool):
        raise ProbabilityParseError(literal, position)
    if isinstance(literal, Decimal):
        value = literal
    elif isinstance(literal, int):
        value = Decimal(literal)
    elif isinstance(literal, float):
        value = Decimal(repr(literal))
    elif isinstance(literal, str):
        text = literal.strip()
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise ProbabilityParseError(literal, position) from None
    else:
        raise ProbabilityParseError(literal, position)
    if not value.is_finite():
        raise ProbabilityParseError(literal, position)
    return value


def parse_probabilities(literals: Iterable[Literal]) -> List[Decimal]:
    """Parses in order, failing on the first bad literal."""
    return [parse_probability(lit, i) for i, lit in enumerate(literals)]
