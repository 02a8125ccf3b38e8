"""
Constant tables for the fused Padé/Gramian approximations. For each supported
order ``N`` these are:

- the ``N + 1`` Padé numerator coefficients ``c_0, ..., c_N`` (the denominator
  uses the same coefficients with alternating signs),
- the ``(N + 1) x (N + 1)`` Gramian coefficient matrix ``W`` where ``W[i][j]``
  weights the degree ``j`` monomial ``A^j B`` in the ``i``-th block of the
  factor, and
- the 1-norm tolerance below which ``exp(A)`` needs no scaling.

These values were computed offline and must not be edited by hand.
"""

from __future__ import annotations

__all__ = [
    "SUPPORTED_ORDERS",
    "PADE_NUMERATORS",
    "GRAM_COEFFICIENTS",
    "NORM_TOLERANCES",
    "gram_sparsity",
]

SUPPORTED_ORDERS = (3, 5, 7, 9, 13)

PADE_NUMERATORS: dict[int, tuple[float, ...]] = {
    3: (120.0, 60.0, 12.0, 1.0),
    5: (30240.0, 15120.0, 3360.0, 420.0, 30.0, 1.0),
    7: (17297280.0, 8648640.0, 1995840.0, 277200.0, 25200.0, 1512.0, 56.0, 1.0),
    9: (
        17643225600.0,
        8821612800.0,
        2075673600.0,
        302702400.0,
        30270240.0,
        2162160.0,
        110880.0,
        3960.0,
        90.0,
        1.0,
    ),
    13: (
        64764752532480000.0,
        32382376266240000.0,
        7771770303897600.0,
        1187353796428800.0,
        129060195264000.0,
        10559470521600.0,
        670442572800.0,
        33522128640.0,
        1323241920.0,
        40840800.0,
        960960.0,
        16380.0,
        182.0,
        1.0,
    ),
}

# fmt: off
GRAM_COEFFICIENTS: dict[int, tuple[tuple[float, ...], ...]] = {
    3: (
        (120.0, 0.0, 2.0, 0.0),
        (0.0, 34.64101615137755, 0.0, 0.0),
        (0.0, 0.0, 4.47213595499958, 0.0),
        (0.0, 0.0, 0.0, 0.37796447300922725),
    ),
    5: (
        (30240.0, 0.0, 840.0, 0.0, 2.0, 0.0),
        (0.0, 8729.536070147142, 0.0, 96.99484522385713, 0.0, 0.0),
        (0.0, 0.0, 1126.978260659894, 0.0, 4.47213595499958, 0.0),
        (0.0, 0.0, 0.0, 95.24704719832526, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 6.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.30151134457776363),
    ),
    7: (
        (1.729728e7, 0.0, 554400.0, 0.0, 3024.0, 0.0, 2.0, 0.0),
        (0.0, 4.993294632124165e6, 0.0, 76819.91741729484, 0.0, 187.06148721743875, 0.0, 0.0),
        (0.0, 0.0, 644631.5650974594, 0.0, 5312.897514539501, 0.0, 4.47213595499958, 0.0),
        (0.0, 0.0, 0.0, 54481.31099744205, 0.0, 232.82611537368396, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 3432.0, 0.0, 6.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 172.46448909848078, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 7.211102550927978, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.25819888974716115),
    ),
    9: (
        (1.76432256e10, 0.0, 6.054048e8, 0.0, 4.32432e6, 0.0, 7920.0, 0.0, 2.0, 0.0),
        (0.0, 5.093160524766648e9, 0.0, 8.987930337823497e7, 0.0, 356663.9022945832, 0.0, 304.8409421321224, 0.0, 0.0),
        (0.0, 0.0, 6.575241963994086e8, 0.0, 6.90676676890135e6, 0.0, 15348.370597558556, 0.0, 4.47213595499958, 0.0),
        (0.0, 0.0, 0.0, 5.557093721739089e7, 0.0, 363208.739982947, 0.0, 412.73720452607614, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 3.50064e6, 0.0, 14040.0, 0.0, 6.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 175913.7788804504, 0.0, 397.994974842648, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 7355.324601946538, 0.0, 7.211102550927978, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 263.36286754210437, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 8.246211251235321, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.22941573387056177),
    ),
    13: (
        (6.476475253248e16, 0.0, 2.3747075928576e15, 0.0, 2.11189410432e13, 0.0, 6.704425728e10, 0.0, 8.16816e7, 0.0, 32760.0, 0.0, 2.0, 0.0),
        (0.0, 1.8695973654313412e16, 0.0, 3.7391947308626825e14, 0.0, 2.0902330793642324e12, 0.0, 4.300891109802947e9, 0.0, 3.2153791191708636e6, 0.0, 623.5382907247958, 0.0, 0.0),
        (0.0, 0.0, 2.413639820142949e15, 0.0, 3.103251197326649e13, 0.0, 1.1660095749482845e11, 0.0, 1.5773939055036315e8, 0.0, 68423.68011149357, 0.0, 4.47213595499958, 0.0),
        (0.0, 0.0, 0.0, 2.0398979633759847e14, 0.0, 1.8132426341119866e12, 0.0, 4.703322049944629e9, 0.0, 4.101972832674541e6, 0.0, 899.5554457619608, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 1.2850149312e13, 0.0, 8.177367744e10, 0.0, 1.465128e8, 0.0, 77520.0, 0.0, 6.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 6.457442995143573e11, 0.0, 2.98035830545088e9, 0.0, 3.5994665524769085e6, 0.0, 1008.2539362680416, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 2.699992554882535e10, 0.0, 8.999975182941784e7, 0.0, 69053.51802768632, 0.0, 7.211102550927978, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 9.667524141735567e8, 0.0, 2.2747115627613096e6, 0.0, 975.991803244269, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 3.0270192261034615e7, 0.0, 47795.04041215992, 0.0, 8.246211251235321, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 842139.2758920582, 0.0, 802.0374056114839, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 21079.848196796866, 0.0, 9.16515138991168, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 479.58315233127195, 0.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 10.0, 0.0),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.19245008972987526),
    ),
}
# fmt: on

NORM_TOLERANCES: dict[int, float] = {
    3: 0.00067,
    5: 0.021,
    7: 0.13,
    9: 0.41,
    13: 1.57,
}


def gram_sparsity(order: int) -> tuple[tuple[bool, ...], ...]:
    """The structural non-zero pattern of the Gramian coefficient matrix

    Entry ``(i, j)`` can only be non-zero when ``j >= i``, when ``i`` and ``j``
    have the same parity, and when ``j < order`` (only the last row reaches
    the degree ``order`` monomial). Every table above has exactly this
    pattern, so any coefficient skipped for being zero is a structural zero.
    """
    size = order + 1
    return tuple(
        tuple(
            j >= i and (j - i) % 2 == 0 and (j < order or i == order)
            for j in range(size)
        )
        for i in range(size)
    )
