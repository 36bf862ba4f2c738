import pytest

from rpcwire.mathsvc import Calculator, MathService


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "service, method, args, expected",
    [
        (MathService, "factorial", (5,), 120),
        (MathService, "factorial", (0,), 1),
        (MathService, "fibonacci", (0,), 0),
        (MathService, "fibonacci", (1,), 1),
        (MathService, "fibonacci", (10,), 55),
        (MathService, "is_prime", (0,), False),
        (Calculator, "add", (17, 0), 17),
        (Calculator, "add", (-40, 40), 0),
        (Calculator, "greet", ("Alice",), "Hello, Alice!"),
        (Calculator, "echo", ("Hello, RPC!",), "Hello, RPC!"),
    ],
)
async def test_known_values(service, method, args, expected):
    assert await getattr(service(), method)(*args) == expected


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "service, method, args, error",
    [
        (MathService, "factorial", (21,), OverflowError),
        (MathService, "factorial", (-1,), ValueError),
        (MathService, "fibonacci", (94,), OverflowError),
        (Calculator, "add", (2**31 - 1, 1), OverflowError),
        (Calculator, "add", (2**31, 0), ValueError),
    ],
)
async def test_out_of_range_raises(service, method, args, error):
    with pytest.raises(error):
        await getattr(service(), method)(*args)


@pytest.mark.asyncio
async def test_factorial_recurrence():
    service = MathService()
    previous = await service.factorial(0)
    for n in range(1, 21):
        current = await service.factorial(n)
        assert current == n * previous
        previous = current


@pytest.mark.asyncio
async def test_fibonacci_recurrence_and_limit():
    service = MathService()
    values = [await service.fibonacci(n) for n in range(94)]
    assert all(values[n] == values[n - 1] + values[n - 2] for n in range(2, 94))
    assert values[93] <= (1 << 64) - 1


@pytest.mark.asyncio
async def test_primes_up_to_twenty():
    service = MathService()
    primes = [n for n in range(1, 21) if await service.is_prime(n)]
    assert primes == [2, 3, 5, 7, 11, 13, 17, 19]


@pytest.mark.asyncio
async def test_products_are_not_prime():
    service = MathService()
    products = [a * b for a in (2, 3, 7, 13) for b in (2, 5, 11, 97)]
    assert [await service.is_prime(p) for p in products] == [False] * len(products)


@pytest.mark.asyncio
async def test_add_is_commutative():
    calc = Calculator()
    assert await calc.add(5, 3) == await calc.add(3, 5)