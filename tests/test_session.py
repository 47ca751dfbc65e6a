"""Tests for CaptureSession: one capture cycle at a time."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.classifiers.base import ClassificationProvider
from app.errors import ParseError, SessionBusyError
from app.models import BinCategory, ClassificationResult
from app.session import CaptureSession

CAN = ClassificationResult(
    item="Aluminum Soda Can",
    category=BinCategory.METAL,
    confidence=0.9,
    instructions="Rinse and crush",
    recyclable=True,
)


def make_provider(has_trash=True, result=CAN) -> ClassificationProvider:
    provider = AsyncMock(spec=ClassificationProvider)
    provider.name = "fake"
    provider.check_presence.return_value = has_trash
    provider.classify.return_value = result
    return provider


@pytest.mark.asyncio
async def test_trash_is_classified():
    provider = make_provider()
    session = CaptureSession(provider)

    result = await session.scan("image")

    assert result.has_trash is True
    assert result.classification == CAN
    assert result.bin.category == BinCategory.METAL
    assert result.bin.name == "Metal Recycling"
    assert result.provider == "fake"
    assert session.last_result == result
    assert session.processing is False


@pytest.mark.asyncio
async def test_no_trash_skips_classification():
    provider = make_provider(has_trash=False)
    result = await CaptureSession(provider).scan("image")

    assert result.has_trash is False
    assert result.classification is None
    assert result.bin is None
    provider.classify.assert_not_called()


@pytest.mark.asyncio
async def test_errors_propagate_and_release_guard():
    provider = make_provider()
    provider.classify.side_effect = ParseError("Could not parse classification result")
    session = CaptureSession(provider)

    with pytest.raises(ParseError):
        await session.scan("image")
    assert session.processing is False
    assert session.last_result is None


@pytest.mark.asyncio
async def test_overlapping_scan_is_rejected():
    release = asyncio.Event()
    provider = make_provider()

    async def slow_presence(image):
        await release.wait()
        return True

    provider.check_presence.side_effect = slow_presence
    session = CaptureSession(provider)

    first = asyncio.create_task(session.scan("image"))
    await asyncio.sleep(0)
    assert session.processing is True

    with pytest.raises(SessionBusyError):
        await session.scan("image")

    release.set()
    assert (await first).classification == CAN


@pytest.mark.asyncio
async def test_reset_abandons_in_flight_result():
    release = asyncio.Event()
    provider = make_provider()

    async def slow_presence(image):
        await release.wait()
        return True

    provider.check_presence.side_effect = slow_presence
    session = CaptureSession(provider)

    pending = asyncio.create_task(session.scan("image"))
    await asyncio.sleep(0)
    session.reset()

    # the abandoned request is still outstanding, so no new cycle may start
    assert session.processing is True
    with pytest.raises(SessionBusyError):
        await session.scan("image")
    assert provider.check_presence.await_count == 1

    release.set()
    assert await pending is None
    assert session.last_result is None
    assert session.processing is False
    # the request was not cancelled, it ran to completion
    provider.classify.assert_awaited_once()

    result = await session.scan("image")
    assert result.classification == CAN
    assert session.last_result == result


@pytest.mark.asyncio
async def test_reset_clears_last_result():
    session = CaptureSession(make_provider())
    await session.scan("image")
    session.reset()
    assert session.last_result is None
