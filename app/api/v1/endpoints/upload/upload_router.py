from fastapi import APIRouter, Depends, Query

from app.schemas.backend_schemas.upload_schemas import UploadUrlRequest, UploadUrlResponse
from app.services.authorization import Caller, ensure, can_request_upload
from app.services.dependencies import get_caller
from app.services.storage_service import create_upload_url

router = APIRouter(prefix="/upload", tags=["Upload"])


@router.get("", response_model=UploadUrlResponse)
def get_upload_url(
    file_name: str = Query(..., min_length=1, max_length=255),
    file_type: str = Query(..., min_length=1, max_length=255),
    caller: Caller = Depends(get_caller),
):
    ensure(can_request_upload(caller))
    return create_upload_url(caller, file_name, file_type)


@router.post("", response_model=UploadUrlResponse)
def post_upload_url(
    payload: UploadUrlRequest,
    caller: Caller = Depends(get_caller),
):
    ensure(can_request_upload(caller))
    return create_upload_url(caller, payload.file_name, payload.file_type)
