import asyncio

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

import store
from database import db
from exceptions import DevDropError, NoteNotFoundError
from realtime import hub, NOTES_PATH, note_path
from schemas.notesschema import NoteSchema

router_realtime = APIRouter(prefix="/notes", tags=["Realtime"])

CLOSE_NOTE_NOT_FOUND = 4404


async def forward_snapshots(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        snapshot = await queue.get()
        await websocket.send_json(snapshot)


async def stop_sender(sender: asyncio.Task | None) -> None:
    if sender is None:
        return
    sender.cancel()
    await asyncio.wait([sender])
    if not sender.cancelled() and sender.exception() is not None:
        print("Something went wrong [Forward snapshots]", sender.exception())


@router_realtime.websocket("/ws")
async def watch_notes(websocket: WebSocket):
    await websocket.accept()
    queue = hub.subscribe(NOTES_PATH)
    sender = None
    try:
        async with db.session() as session:
            await websocket.send_json(await store.list_notes(session))

        sender = asyncio.create_task(forward_snapshots(websocket, queue))
        while True:
            # Clients only listen here, anything they send is ignored
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await stop_sender(sender)
        hub.unsubscribe(NOTES_PATH, queue)


@router_realtime.websocket("/{note_id}/ws")
async def watch_note(note_id: str, websocket: WebSocket):
    """Streams snapshots of one note and accepts ``{"content": ...}`` writes."""
    await websocket.accept()
    path = note_path(note_id)
    queue = hub.subscribe(path)
    sender = None
    try:
        async with db.session() as session:
            note = await store.get_note(session, note_id)
            await websocket.send_json(NoteSchema.from_model(note).model_dump(by_alias=True))

        sender = asyncio.create_task(forward_snapshots(websocket, queue))
        while True:
            message = await websocket.receive_json()
            content = message.get("content") if isinstance(message, dict) else None
            if not isinstance(content, str):
                await websocket.send_json({"success": False, "error": "Missing content"})
                continue

            try:
                async with db.session() as session:
                    await store.update_content(session, note_id, content)
            except NoteNotFoundError:
                raise
            except DevDropError as e:
                await websocket.send_json({"success": False, "error": e.message})
            except Exception as e:
                print("Something went wrong [Watch note]", e)
                await websocket.send_json({"success": False, "error": "Failed to save code."})
    except NoteNotFoundError as e:
        await websocket.close(code=CLOSE_NOTE_NOT_FOUND, reason=e.message)
    except WebSocketDisconnect:
        pass
    finally:
        await stop_sender(sender)
        hub.unsubscribe(path, queue)
