from decimal import Decimal
from typing import List, Sequence

def out_of_range_positions(probabilities: Sequence[Decimal]) -> List[int]:
    return [i for i, p in enumerate(probabilities) if p < 0 or p > 1]

def violates_unit_interval(probabilities: Sequence[Decimal]) -> bool:
    for p in probabilities:
        if p < 0 or p > 1:
            return True
    return False
