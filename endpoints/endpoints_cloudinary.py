from fastapi import Request, APIRouter
from fastapi.responses import JSONResponse

from limiter import limiter
from media import media_storage
from constants import LIMIT_VALUE_CLOUDINARY, SCOPE_CLOUDINARY
from schemas.mediaschema import (
    UploadMediaSchema,
    DeleteMediaSchema,
    BulkDeleteMediaSchema,
)

router_cloudinary = APIRouter(prefix="/api/cloudinary", tags=["Cloudinary"])


@router_cloudinary.post(
    "/upload",
    description="Accepts file as base64 data URI or remote URL. Returns secure url and public id of the uploaded file",
    summary="Upload file",
)
@limiter.shared_limit(LIMIT_VALUE_CLOUDINARY, SCOPE_CLOUDINARY)
async def upload(uploadMediaSchema: UploadMediaSchema, request: Request):
    try:
        result = await media_storage.upload(uploadMediaSchema.file)

        return {"url": result["secure_url"], "public_id": result["public_id"]}
    except Exception as e:
        print("Something went wrong [Upload]", e)

        return JSONResponse({"error": str(e)}, 500)


@router_cloudinary.delete(
    "/delete",
    description="Accepts public id. Returns result of media storage destroy call",
    summary="Delete file",
)
@limiter.shared_limit(LIMIT_VALUE_CLOUDINARY, SCOPE_CLOUDINARY)
async def delete(deleteMediaSchema: DeleteMediaSchema, request: Request):
    if not deleteMediaSchema.public_id:
        return JSONResponse({"error": "Missing public_id"}, 400)

    try:
        result = await media_storage.destroy(deleteMediaSchema.public_id)

        return {"success": True, "result": result}
    except Exception as e:
        print("Something went wrong [Delete]", e)

        return JSONResponse({"error": str(e)}, 500)


@router_cloudinary.delete(
    "/bulk-delete",
    description="Accepts array of public ids. Deletes them in batches of 100 and returns result of every batch",
    summary="Bulk delete files",
)
@limiter.shared_limit(LIMIT_VALUE_CLOUDINARY, SCOPE_CLOUDINARY)
async def bulk_delete(bulkDeleteMediaSchema: BulkDeleteMediaSchema, request: Request):
    public_ids = bulkDeleteMediaSchema.public_ids
    if not isinstance(public_ids, list) or not public_ids:
        return JSONResponse({"error": "Invalid public_ids array"}, 400)

    try:
        results = await media_storage.bulk_delete(public_ids)

        return {"success": True, "results": results}
    except Exception as e:
        print("Something went wrong [Bulk delete]", e)

        return JSONResponse({"error": str(e)}, 500)
