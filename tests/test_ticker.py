import asyncio

from focusclock.core.status import ClockStatus
from focusclock.tools.time_tools.session_clock import SessionClock, SessionKind
from focusclock.tools.time_tools.ticker import Ticker


def test_ticker_runs_only_while_clock_is_running():
    async def scenario():
        clock = SessionClock()
        ticker = Ticker(clock, interval=0.01)
        assert not ticker.is_active

        clock.start()
        assert ticker.is_active
        await asyncio.sleep(0.1)
        clock.pause()
        assert not ticker.is_active

        paused_at = clock.remaining_seconds
        await asyncio.sleep(0.05)
        ticker.close()
        return clock, ticker, paused_at

    clock, ticker, paused_at = asyncio.run(scenario())
    assert paused_at < 1500
    assert clock.remaining_seconds == paused_at
    assert ticker.ticks_delivered == 1500 - paused_at


def test_ticker_drives_clock_to_expiry_and_stops():
    async def scenario():
        clock = SessionClock(SessionKind.SHORT_BREAK)
        ticker = Ticker(clock, interval=0)
        expired = asyncio.Event()
        clock.on_expired.add_listener(lambda **_: expired.set())

        clock.start()
        await asyncio.wait_for(expired.wait(), timeout=5)
        await asyncio.sleep(0.01)
        return clock, ticker

    clock, ticker = asyncio.run(scenario())
    assert clock.status is ClockStatus.EXPIRED
    assert ticker.ticks_delivered == 300
    assert not ticker.is_active


def test_restart_after_pause_resumes_ticking():
    async def scenario():
        clock = SessionClock()
        ticker = Ticker(clock, interval=0.01)
        clock.start()
        await asyncio.sleep(0.05)
        clock.pause()
        clock.start()
        await asyncio.sleep(0.05)
        clock.reset()
        return clock, ticker

    clock, ticker = asyncio.run(scenario())
    assert not ticker.is_active
    assert ticker.ticks_delivered > 0
    assert clock.remaining_seconds == 1500
