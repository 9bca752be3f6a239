"""File upload endpoint for cover art and audio previews."""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from label_cms.authorization import Operation, authorize
from label_cms.exceptions import ValidationError
from label_cms.schemas.common import ApiResponse
from label_cms.schemas.upload import UploadResult
from label_cms.services.storage import LocalFileStorage, get_file_storage, parse_upload_kind
from label_cms.utils.security import CurrentPrincipal

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("", response_model=ApiResponse[UploadResult], status_code=201)
async def upload_file(
    principal: CurrentPrincipal,
    file: UploadFile | None = File(None, description="File to upload"),
    upload_type: str | None = Form(None, alias="type", description="image | audio"),
    storage: LocalFileStorage = Depends(get_file_storage),
) -> ApiResponse[UploadResult]:
    """Store an uploaded image or audio file and return its public URL.

    Images may be up to 5 MB and audio up to 50 MB by default. Admin only.
    """
    authorize(principal, Operation.WRITE)

    if file is None:
        raise ValidationError("No file provided")
    kind = parse_upload_kind(upload_type)

    # One byte past the limit is enough to reject oversize files
    content = await file.read(storage.max_size(kind) + 1)
    result = await storage.save(kind, content, file.content_type, file.filename)

    return ApiResponse[UploadResult](
        success=True,
        message="File uploaded successfully",
        data=result,
    )
