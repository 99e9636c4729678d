import cloudinary
import cloudinary.api
import cloudinary.uploader
from fastapi.concurrency import run_in_threadpool

from os import environ
from dotenv import load_dotenv

from constants import MEDIA_FOLDER, BULK_DELETE_CHUNK_SIZE

load_dotenv()


class MediaStorage:
    """Cloudinary client configured from CLOUDINARY_* environment variables.

    The SDK is blocking, so every call is pushed to the threadpool.
    """

    def __init__(self) -> None:
        self.setup_client()

    def setup_client(self) -> None:
        cloudinary.config(
            cloud_name=environ.get("CLOUDINARY_CLOUD_NAME"),
            api_key=environ.get("CLOUDINARY_API_KEY"),
            api_secret=environ.get("CLOUDINARY_API_SECRET"),
            secure=True,
        )

    async def upload(self, file: str, folder: str = MEDIA_FOLDER) -> dict:
        return await run_in_threadpool(
            cloudinary.uploader.upload,
            file,
            folder=folder,
            resource_type="auto",
            access_control=[{"access_type": "anonymous"}],
        )

    async def destroy(self, public_id: str, resource_type: str = "image") -> dict:
        return await run_in_threadpool(
            cloudinary.uploader.destroy, public_id, resource_type=resource_type
        )

    async def bulk_delete(
        self,
        public_ids: list[str],
        resource_type: str = "image",
        chunk_size: int = BULK_DELETE_CHUNK_SIZE,
    ) -> list[dict]:
        results = []
        for i in range(0, len(public_ids), chunk_size):
            chunk = public_ids[i : i + chunk_size]
            result = await run_in_threadpool(
                cloudinary.api.delete_resources, chunk, resource_type=resource_type
            )
            results.append(result)
        return results


media_storage = MediaStorage()
