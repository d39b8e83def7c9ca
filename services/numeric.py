"""Rounding helpers shared by the analytics services"""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always upwards (62.5 -> 63)"""
    return int(math.floor(value + 0.5))


def round1(value: float) -> float:
    """Round to one decimal place, .05 upwards"""
    return math.floor(value * 10 + 0.5) / 10


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
