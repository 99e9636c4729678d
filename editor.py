import asyncio
from collections import deque
from contextlib import aclosing
from typing import Any, AsyncIterator, Awaitable, Callable

SAVE_DELAY = 0.8
MAX_UNACKNOWLEDGED = 32


class EditorSession:
    """Local text buffer of one note kept in sync with the server.

    Local edits are saved once the user stops typing for ``delay`` seconds.
    Remote snapshots overwrite the buffer when their content differs; while
    one is applied the remote-update flag keeps the change from being saved
    back. Snapshots that echo one of this session's own saves are skipped so
    typing done after that save survives. Concurrent editors are not merged,
    the last save wins.
    """

    def __init__(
        self, save: Callable[[str], Awaitable[Any]], delay: float = SAVE_DELAY
    ) -> None:
        self.save = save
        self.delay = delay
        self.text = ""
        self.saving = False
        self.connected = False
        self.is_remote_update = False
        self.pending: asyncio.Task | None = None
        # texts sent to the server whose echo has not come back yet, oldest first
        self.unacknowledged: deque[str] = deque(maxlen=MAX_UNACKNOWLEDGED)

    @classmethod
    def for_note(cls, client, note_id: str, delay: float = SAVE_DELAY) -> "EditorSession":
        async def save(text: str) -> None:
            await client.save_content(note_id, text)

        return cls(save, delay)

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    @property
    def char_count(self) -> int:
        return len(self.text)

    def edit(self, text: str) -> None:
        self.text = text
        if self.is_remote_update:
            return
        self.cancel_pending()
        self.pending = asyncio.create_task(self.save_later(text))

    def acknowledge(self, content: str) -> bool:
        if content not in self.unacknowledged:
            return False
        while self.unacknowledged.popleft() != content:
            pass
        return True

    def apply_snapshot(self, snapshot: dict | None) -> None:
        self.connected = True
        content = (snapshot or {}).get("content") or ""
        if self.acknowledge(content) or content == self.text:
            return

        # another writer: remote wins over an edit that has not been saved yet
        self.unacknowledged.clear()
        self.cancel_pending()
        self.is_remote_update = True
        try:
            self.edit(content)
        finally:
            self.is_remote_update = False

    async def listen(self, snapshots: AsyncIterator[dict | None]) -> None:
        """Apply snapshots until the stream ends or the note is deleted."""
        try:
            async with aclosing(snapshots):
                async for snapshot in snapshots:
                    if snapshot is None:
                        break
                    self.apply_snapshot(snapshot)
        finally:
            self.disconnect()

    def disconnect(self) -> None:
        self.connected = False

    def cancel_pending(self) -> None:
        if self.pending is not None and not self.pending.done():
            self.pending.cancel()
        self.pending = None

    async def save_later(self, text: str) -> None:
        await asyncio.sleep(self.delay)
        await self.write(text)

    async def write(self, text: str) -> None:
        self.saving = True
        self.unacknowledged.append(text)
        try:
            await self.save(text)
        except Exception as e:
            print("Something went wrong [Save content]", e)
            if text in self.unacknowledged:
                self.unacknowledged.remove(text)
        finally:
            self.saving = False

    async def flush(self) -> None:
        if self.pending is None or self.pending.done():
            return
        self.cancel_pending()
        await self.write(self.text)

    async def close(self) -> None:
        await self.flush()
        self.disconnect()
