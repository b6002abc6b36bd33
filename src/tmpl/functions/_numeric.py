"""Numeric conversion, integer sequences and arithmetic.

Integer helpers coerce every operand with `to_int` and float helpers with
`to_float`, so string operands taken straight from the environment work
without an explicit conversion step.
"""

import math

from ._generic import to_float, to_int

# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def atoi(value: object) -> int:
    return to_int(value)


def int64(value: object) -> int:
    return to_int(value)


def float64(value: object) -> float:
    return to_float(value)


# ---------------------------------------------------------------------------
# Sequences
# ---------------------------------------------------------------------------


def until_step(start: object, stop: object, step: object) -> list[int]:
    """Return integers from `start` toward `stop` (exclusive) by `step`.

    A zero step, or a step pointing away from `stop`, yields an empty list.
    """
    first, end, stride = to_int(start), to_int(stop), to_int(step)
    if stride == 0:
        return []
    return list(range(first, end, stride))


def until(count: object) -> list[int]:
    limit = to_int(count)
    return until_step(0, limit, -1 if limit < 0 else 1)


def seq(*params: object) -> list[int]:
    """Inclusive integer sequence.

    `seq(end)` counts from 1, `seq(start, end)` counts up or down, and
    `seq(start, step, end)` uses an explicit step.
    """
    bounds = [to_int(param) for param in params]
    match bounds:
        case [end]:
            start, stop, step = 1, end + 1, 1
        case [start, end]:
            if start <= end:
                stop, step = end + 1, 1
            else:
                stop, step = end - 1, -1
        case [start, step, end]:
            stop = end + 1 if step > 0 else end - 1
        case _:
            return []
    if step == 0:
        return []
    return list(range(start, stop, step))


# ---------------------------------------------------------------------------
# Integer arithmetic
# ---------------------------------------------------------------------------


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def add1(value: object) -> int:
    return to_int(value) + 1


def add(*values: object) -> int:
    return sum(to_int(value) for value in values)


def sub(a: object, b: object) -> int:
    return to_int(a) - to_int(b)


def div(a: object, b: object) -> int:
    """Integer division truncating toward zero; a zero divisor yields 0."""
    divisor = to_int(b)
    if divisor == 0:
        return 0
    return _trunc_div(to_int(a), divisor)


def mod(a: object, b: object) -> int:
    """Remainder with the sign of the dividend; a zero divisor yields 0."""
    dividend, divisor = to_int(a), to_int(b)
    if divisor == 0:
        return 0
    return dividend - divisor * _trunc_div(dividend, divisor)


def mul(a: object, *values: object) -> int:
    result = to_int(a)
    for value in values:
        result *= to_int(value)
    return result


def biggest(a: object, *values: object) -> int:
    return max([to_int(a), *(to_int(value) for value in values)])


def smallest(a: object, *values: object) -> int:
    return min([to_int(a), *(to_int(value) for value in values)])


# ---------------------------------------------------------------------------
# Float arithmetic
# ---------------------------------------------------------------------------


def _ieee_div(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def add1f(value: object) -> float:
    return to_float(value) + 1


def addf(*values: object) -> float:
    return math.fsum(to_float(value) for value in values)


def subf(a: object, *values: object) -> float:
    result = to_float(a)
    for value in values:
        result -= to_float(value)
    return result


def divf(a: object, *values: object) -> float:
    """Float division; dividing by zero yields an infinity or NaN."""
    result = to_float(a)
    for value in values:
        result = _ieee_div(result, to_float(value))
    return result


def mulf(a: object, *values: object) -> float:
    result = to_float(a)
    for value in values:
        result *= to_float(value)
    return result


def maxf(a: object, *values: object) -> float:
    result = to_float(a)
    for value in values:
        result = max(result, to_float(value))
    return result


def minf(a: object, *values: object) -> float:
    result = to_float(a)
    for value in values:
        result = min(result, to_float(value))
    return result


def ceil(value: object) -> float:
    number = to_float(value)
    if not math.isfinite(number):
        return number
    return float(math.ceil(number))


def floor(value: object) -> float:
    number = to_float(value)
    if not math.isfinite(number):
        return number
    return float(math.floor(number))


def round_(value: object) -> float:
    """Round to the nearest integer, halves away from zero."""
    number = to_float(value)
    if not math.isfinite(number):
        return number
    return math.copysign(float(math.floor(abs(number) + 0.5)), number)
