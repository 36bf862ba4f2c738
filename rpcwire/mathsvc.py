"""Arithmetic services: number theory helpers and a simple calculator."""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

U64_MAX = (1 << 64) - 1
I32_MIN = -(1 << 31)
I32_MAX = (1 << 31) - 1


def _check_u64(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"expected an integer, got {n!r}")
    if not 0 <= n <= U64_MAX:
        raise ValueError(f"{n} is outside the unsigned 64-bit range")
    return n


def _check_i32(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"expected an integer, got {n!r}")
    if not I32_MIN <= n <= I32_MAX:
        raise ValueError(f"{n} is outside the signed 32-bit range")
    return n


def _fit_u64(value: int, what: str) -> int:
    if value > U64_MAX:
        raise OverflowError(f"{what} does not fit in 64 unsigned bits")
    return value


class MathService:
    """Factorials, Fibonacci numbers and primality on unsigned 64-bit values."""

    async def factorial(self, n: int) -> int:
        """Return n!; raises OverflowError past the 64-bit range."""
        _check_u64(n)
        logger.info("Computing factorial(%d)", n)
        result = 1
        for k in range(2, n + 1):
            result = _fit_u64(result * k, f"factorial({n})")
        return result

    async def fibonacci(self, n: int) -> int:
        """Return the n-th Fibonacci number, counting from F(0) = 0."""
        _check_u64(n)
        logger.info("Computing fibonacci(%d)", n)
        if n <= 1:
            return n
        a, b = 0, 1
        for _ in range(2, n + 1):
            a, b = b, _fit_u64(a + b, f"fibonacci({n})")
        return b

    async def is_prime(self, n: int) -> bool:
        """Return whether n is prime, by trial division."""
        _check_u64(n)
        logger.info("Checking if %d is prime", n)
        if n < 2:
            return False
        return all(n % i for i in range(2, math.isqrt(n) + 1))


class Calculator:
    """Adds 32-bit integers and handles greetings."""

    async def add(self, a: int, b: int) -> int:
        """Return a + b; raises OverflowError past the 32-bit range."""
        _check_i32(a)
        _check_i32(b)
        logger.info("Computing %d + %d", a, b)
        total = a + b
        if not I32_MIN <= total <= I32_MAX:
            raise OverflowError(f"{a} + {b} does not fit in 32 signed bits")
        return total

    async def greet(self, name: str) -> str:
        """Return a greeting for ``name``."""
        logger.info("Greeting %s", name)
        return f"Hello, {name}!"

    async def echo(self, msg: str) -> str:
        """Return ``msg`` unchanged."""
        logger.info("Echoing: %s", msg)
        return msg