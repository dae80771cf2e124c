import logging
from unittest.mock import AsyncMock

import pytest

from orgauth.app.services.side_effects import BestEffort, Propagating


@pytest.mark.asyncio
async def test_best_effort_returns_value():
    operation = AsyncMock(return_value=42)

    assert await BestEffort(operation, name="answer")(1, key="v") == 42
    operation.assert_called_once_with(1, key="v")


@pytest.mark.asyncio
async def test_best_effort_logs_and_discards_failure(caplog):
    operation = AsyncMock(side_effect=ValueError("nope"))

    with caplog.at_level(logging.WARNING):
        result = await BestEffort(operation, name="flaky")()

    assert result is None
    assert "Best-effort operation flaky failed" in caplog.text
    assert "ValueError" in caplog.text


@pytest.mark.asyncio
async def test_propagating_raises():
    operation = AsyncMock(side_effect=ValueError("nope"))

    with pytest.raises(ValueError):
        await Propagating(operation, name="strict")()
