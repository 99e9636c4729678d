from typing import Any, AsyncIterator

import httpx
from httpx_ws import aconnect_ws, WebSocketDisconnect

CLOSE_NOTE_NOT_FOUND = 4404


class DevDropClientError(Exception):
    def __init__(self, status_code: int, error: str) -> None:
        super().__init__(f"{status_code}: {error}")
        self.status_code = status_code
        self.error = error


class DevDropClient:
    """Async client for the DevDrop HTTP API."""

    def __init__(
        self, base_url: str = "http://localhost:8000", client: httpx.AsyncClient | None = None
    ) -> None:
        self.client = client or httpx.AsyncClient(base_url=base_url)

    async def __aenter__(self) -> "DevDropClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def request(self, method: str, url: str, **kwargs) -> Any:
        response = await self.client.request(method, url, **kwargs)
        if response.is_error:
            try:
                error = response.json().get("error") or response.text
            except ValueError:
                error = response.text
            raise DevDropClientError(response.status_code, error)
        return response.json()

    async def list_notes(self, search: str | None = None) -> list[dict]:
        params = {"search": search} if search else None
        data = await self.request("GET", "/notes", params=params)
        return data["notes"]

    async def create_note(self, name: str) -> dict:
        return await self.request("POST", "/notes", json={"name": name})

    async def get_note(self, note_id: str) -> dict:
        return await self.request("GET", f"/notes/{note_id}")

    async def rename_note(self, note_id: str, name: str) -> dict:
        return await self.request("PUT", f"/notes/{note_id}/name", json={"name": name})

    async def save_content(self, note_id: str, content: str) -> None:
        await self.request("PUT", f"/notes/{note_id}/content", json={"content": content})

    async def delete_note(self, note_id: str) -> None:
        await self.request("DELETE", f"/notes/{note_id}")

    async def list_files(self, note_id: str) -> dict[str, dict]:
        return await self.request("GET", f"/notes/{note_id}/files")

    async def attach_file(self, note_id: str, reference: dict) -> dict:
        return await self.request("POST", f"/notes/{note_id}/files", json=reference)

    async def upload_file(self, note_id: str, file: str, name: str | None = None) -> dict:
        return await self.request(
            "POST", f"/notes/{note_id}/files/upload", json={"file": file, "name": name}
        )

    async def delete_file(self, note_id: str, key: str) -> None:
        await self.request("DELETE", f"/notes/{note_id}/files/{key}")

    async def upload_media(self, file: str) -> dict:
        return await self.request("POST", "/api/cloudinary/upload", json={"file": file})

    async def delete_media(self, public_id: str) -> dict:
        return await self.request(
            "DELETE", "/api/cloudinary/delete", json={"public_id": public_id}
        )

    async def bulk_delete_media(self, public_ids: list[str]) -> dict:
        return await self.request(
            "DELETE", "/api/cloudinary/bulk-delete", json={"public_ids": public_ids}
        )

    async def stream(self, url: str) -> AsyncIterator[Any]:
        try:
            async with aconnect_ws(url, self.client) as websocket:
                while True:
                    yield await websocket.receive_json()
        except WebSocketDisconnect as e:
            if e.code == CLOSE_NOTE_NOT_FOUND:
                raise DevDropClientError(404, e.reason or "Code not found") from e

    def watch_notes(self) -> AsyncIterator[list[dict]]:
        """Yield the note list on connect and after every change."""
        return self.stream("/notes/ws")

    def watch_note(self, note_id: str) -> AsyncIterator[dict | None]:
        """Yield snapshots of one note; ``None`` once it is deleted."""
        return self.stream(f"/notes/{note_id}/ws")
