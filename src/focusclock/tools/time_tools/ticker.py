import asyncio
from focusclock.tools.time_tools.base_tool import TimeTool
from focusclock.utils.logging_handler import setup_logger

logger = setup_logger(__name__)


class Ticker:
    """
    Periodic tick source for a TimeTool.

    Follows the tool's on_change event: a tick task runs on the asyncio loop
    while the tool is running and is cancelled as soon as it leaves that state,
    so no tick is ever delivered to an idle or expired clock. Ticks and user
    intents share the loop thread and therefore never overlap.
    """
    def __init__(self, tool: TimeTool, interval: float = 1.0, loop: asyncio.AbstractEventLoop | None = None):
        self.tool = tool
        self.interval = interval
        self.loop = loop
        self._task: asyncio.Task | None = None
        self.ticks_delivered = 0
        tool.on_change.add_listener(self._on_change)

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def _on_change(self, **_status):
        if self.tool.is_running:
            self.start()
        else:
            self.stop()

    def start(self):
        if self.is_active:
            return
        loop = self.loop or asyncio.get_running_loop()
        self._task = loop.create_task(self._run())
        logger.debug("Ticker started.")

    def stop(self):
        if self._task is None:
            return
        task, self._task = self._task, None
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # the run loop exits by itself when the tick it just delivered stopped the tool
        if task is not current:
            task.cancel()
        logger.debug("Ticker stopped.")

    def close(self):
        self.stop()
        self.tool.on_change.remove_listener(self._on_change)

    async def _run(self):
        """Deliver one tick per interval, scheduled against loop time so sleeps do not drift."""
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while self.tool.is_running:
            deadline += self.interval
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            if not self.tool.is_running:
                break
            self.ticks_delivered += 1
            self.tool.tick()
