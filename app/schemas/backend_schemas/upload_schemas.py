from pydantic import BaseModel, Field


class UploadUrlRequest(BaseModel):
    file_name: str = Field(..., min_length=1, max_length=255)
    file_type: str = Field(..., min_length=1, max_length=255)


class UploadUrlResponse(BaseModel):
    upload_url: str
    file_url: str
    message: str = "Use the upload_url to upload your file directly to storage"
