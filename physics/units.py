"""Pixel <-> simulation-unit conversion at one fixed scale."""
from typing import Tuple

import physics as P


def p2m(px: float) -> float:
    return px / P.SCALE


def m2p(m: float) -> float:
    return m * P.SCALE


def vec_p2m(v) -> Tuple[float, float]:
    return p2m(v[0]), p2m(v[1])


def vec_m2p(v) -> Tuple[float, float]:
    return m2p(v[0]), m2p(v[1])
