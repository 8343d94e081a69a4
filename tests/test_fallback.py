import pytest

from reverie.libs.ml.fallback import constant, with_fallback


@pytest.mark.asyncio
async def test_primary_result_returned() -> None:
    async def primary(x):
        return x * 2

    runner = with_fallback(primary, constant(-1))
    assert await runner(4) == 8


@pytest.mark.asyncio
async def test_exception_triggers_fallback_with_same_args() -> None:
    seen = []

    async def primary(x, *, flag):
        raise RuntimeError("down")

    async def fallback(x, *, flag):
        seen.append((x, flag))
        return "fallback"

    runner = with_fallback(primary, fallback)
    assert await runner(1, flag=True) == "fallback"
    assert seen == [(1, True)]


@pytest.mark.asyncio
async def test_rejected_result_triggers_fallback() -> None:
    async def primary():
        return None

    runner = with_fallback(primary, constant("default"), accept=lambda value: value is not None)
    assert await runner() == "default"


@pytest.mark.asyncio
async def test_fallback_errors_propagate() -> None:
    async def primary():
        raise RuntimeError("primary")

    async def fallback():
        raise LookupError("fallback")

    with pytest.raises(LookupError):
        await with_fallback(primary, fallback)()
