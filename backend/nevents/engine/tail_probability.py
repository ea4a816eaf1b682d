import os
from decimal import Decimal, MAX_EMAX, MIN_EMIN, localcontext
from typing import List, Optional, Sequence

import numpy as np

# Significant decimal digits used by the exact engine. With P digits every
# table cell carries a relative error of at most ~2*M*10^(1-P).
DEFAULT_PRECISION = int(os.environ.get("NEVENTS_PRECISION", "100"))


def resolve_precision(precision: Optional[int]) -> int:
    prec = DEFAULT_PRECISION if precision is None else int(precision)
    if prec < 1:
        raise ValueError(f"precision must be >= 1, got {prec}")
    return prec


def probability_at_least_n(n: int, probabilities: Sequence[Decimal], precision: Optional[int] = None, prune: bool = True) -> Decimal:
    """
    Calcula P(S >= n) onde S = soma de Bernoullis independentes com probabilidades dadas,
    em aritmética Decimal com `precision` dígitos significativos.
    DP O(M * min(M, M-n+1)) com prune=True, O(M^2) sem.
    """
    m = len(probabilities)
    # More events required than exist: impossible.
    if n > m:
        return Decimal(0)
    # Zero or fewer events required: certain.
    if n <= 0:
        return Decimal(1)

    prec = resolve_precision(precision)
    with localcontext() as ctx:
        ctx.prec = prec
        # full exponent range: products neither flush to 0 nor overflow
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        # exact_probs[j] = prob de ter exatamente j sucessos após processar i variáveis (in-place)
        exact_probs = [Decimal(0)] * (m + 1)
        exact_probs[0] = Decimal(1)

        # Only cells within `width` of the top can still reach index n.
        width = m - n
        for i, pi in enumerate(probabilities):
            qi = 1 - pi
            exact_probs[i + 1] = exact_probs[i] * pi
            left = max(0, i - width) if prune else 0
            # update backwards: cell j reads the old j-1
            for j in range(i, left, -1):
                exact_probs[j] = exact_probs[j] * qi + exact_probs[j - 1] * pi
            exact_probs[0] = exact_probs[0] * qi

        return sum(exact_probs[n:], Decimal(0))


def exact_distribution(probabilities: Sequence[Decimal], precision: Optional[int] = None) -> List[Decimal]:
    """Full table of P(S == k) for k = 0..M, never pruned."""
    m = len(probabilities)
    prec = resolve_precision(precision)
    with localcontext() as ctx:
        ctx.prec = prec
        # full exponent range: products neither flush to 0 nor overflow
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        exact_probs = [Decimal(0)] * (m + 1)
        exact_probs[0] = Decimal(1)
        for i, pi in enumerate(probabilities):
            qi = 1 - pi
            exact_probs[i + 1] = exact_probs[i] * pi
            for j in range(i, 0, -1):
                exact_probs[j] = exact_probs[j] * qi + exact_probs[j - 1] * pi
            exact_probs[0] = exact_probs[0] * qi
        return exact_probs


def probability_at_least_n_float(n: int, probabilities: Sequence[float]) -> float:
    """
    float64 version of probability_at_least_n. Fast, but values below
    ~1e-308 underflow to 0 and rounding drift grows with M.
    """
    m = len(probabilities)
    if n > m:
        return 0.0
    if n <= 0:
        return 1.0
    dp = np.zeros(m + 1, dtype=np.float64)
    dp[0] = 1.0
    for p in probabilities:
        p = float(p)
        # right-hand side is evaluated before assignment
        dp[1:m + 1] = dp[1:m + 1] * (1 - p) + dp[0:m] * p
        dp[0] = dp[0] * (1 - p)
    return float(np.sum(dp[n:]))
