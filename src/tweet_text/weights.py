"""Codepoint weight tables used for weighted tweet length."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WeightRange:
    """Inclusive codepoint range with the weight of every codepoint in it."""

    start: int
    end: int
    weight: int

    def contains(self, codepoint: int) -> bool:
        return self.start <= codepoint <= self.end


@dataclass(frozen=True)
class WeightTable:
    """Ordered, disjoint weight ranges plus the fallback weight and scale.

    Lookup is a linear scan in table order; the first range containing the
    codepoint wins.  Codepoints outside every range cost ``default_weight``.
    """

    ranges: tuple[WeightRange, ...]
    default_weight: int
    scale: int

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError(f"Scale must be positive, got {self.scale}.")
        previous: WeightRange | None = None
        for r in self.ranges:
            if r.start > r.end:
                raise ValueError(f"Range start {r.start} exceeds end {r.end}.")
            if previous is not None and r.start <= previous.end:
                raise ValueError(
                    f"Range {r.start}-{r.end} overlaps or precedes "
                    f"{previous.start}-{previous.end}.",
                )
            previous = r

    def weight_of(self, codepoint: int) -> int:
        for r in self.ranges:
            if r.contains(codepoint):
                return r.weight
        return self.default_weight

    def raw_weight(self, text: str) -> int:
        """Sum of codepoint weights of *text*, before dividing by scale."""
        return sum(self.weight_of(ord(ch)) for ch in text)


# Every codepoint weighs one unit.
UNWEIGHTED_TABLE = WeightTable(ranges=(), default_weight=1, scale=1)

# Latin-1 through Hangul Jamo, plus general punctuation and spaces, count once;
# everything else (CJK, emoji, ...) counts twice.
DEFAULT_TABLE = WeightTable(
    ranges=(
        WeightRange(start=0, end=4351, weight=100),
        WeightRange(start=8192, end=8205, weight=100),
        WeightRange(start=8208, end=8223, weight=100),
        WeightRange(start=8242, end=8247, weight=100),
    ),
    default_weight=200,
    scale=100,
)
