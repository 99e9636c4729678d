import asyncio
from collections import defaultdict
from typing import Any

NOTES_PATH = "notes"

# snapshots are whole states, so a subscriber only needs the newest few
QUEUE_SIZE = 8


def note_path(note_id: str) -> str:
    return f"{NOTES_PATH}/{note_id}"


class RealtimeHub:
    """Fans out snapshots to every subscriber of a path.

    Each subscriber owns a bounded queue. Publishing never blocks: when a
    queue is full its oldest snapshot is dropped, so a stalled websocket
    only loses states that newer ones already supersede.
    """

    def __init__(self, queue_size: int = QUEUE_SIZE) -> None:
        self.queue_size = queue_size
        self.subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)

    def subscribe(self, path: str) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self.subscribers[path].add(queue)
        return queue

    def unsubscribe(self, path: str, queue: asyncio.Queue) -> None:
        queues = self.subscribers.get(path)
        if queues is None:
            return
        queues.discard(queue)
        if not queues:
            del self.subscribers[path]

    def subscriber_count(self, path: str) -> int:
        return len(self.subscribers.get(path, ()))

    def publish(self, path: str, snapshot: Any) -> None:
        for queue in list(self.subscribers.get(path, ())):
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(snapshot)


hub = RealtimeHub()
