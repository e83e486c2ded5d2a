import logging
import time

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.exceptions import UpstreamFailure, ValidationError
from app.models.user_models import UserRole
from app.services.authorization import Caller

logger = logging.getLogger(__name__)

_client = None


def _get_client():
    """Lazy initialization of the S3 client"""
    global _client
    if _client is None:
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            _client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=settings.AWS_REGION,
                config=Config(signature_version="s3v4"),
            )
        else:
            # IAM role credentials (ECS/EC2)
            _client = boto3.client(
                "s3",
                region_name=settings.AWS_REGION,
                config=Config(signature_version="s3v4"),
            )
    return _client


def _key_prefix(caller: Caller) -> str:
    return "applications" if caller.role == UserRole.STUDENT else "notices"


def _sanitize_file_name(file_name: str) -> str:
    # keep only the last path segment
    name = file_name.replace("\\", "/").rsplit("/", 1)[-1].strip()
    return name.replace(" ", "-")


def build_object_key(caller: Caller, file_name: str) -> str:
    return f"{_key_prefix(caller)}/{int(time.time() * 1000)}-{_sanitize_file_name(file_name)}"


def public_file_url(key: str) -> str:
    return f"https://{settings.AWS_S3_BUCKET_NAME}.s3.{settings.AWS_REGION}.amazonaws.com/{key}"


def create_upload_url(caller: Caller, file_name: str, file_type: str) -> dict:
    """Issue a short-lived presigned PUT URL; file bytes never pass through the API."""
    if not settings.AWS_S3_BUCKET_NAME:
        raise UpstreamFailure("Object storage is not configured")

    if not _sanitize_file_name(file_name):
        raise ValidationError("file_name is invalid")

    key = build_object_key(caller, file_name)
    try:
        upload_url = _get_client().generate_presigned_url(
            "put_object",
            Params={
                "Bucket": settings.AWS_S3_BUCKET_NAME,
                "Key": key,
                "ContentType": file_type,
            },
            ExpiresIn=settings.UPLOAD_URL_EXPIRES_SECONDS,
        )
    except (BotoCoreError, ClientError) as e:
        logger.exception("Failed to generate presigned upload URL")
        raise UpstreamFailure("Failed to generate upload URL") from e

    logger.info("Upload URL issued user_id=%s key=%s", caller.id, key)
    return {"upload_url": upload_url, "file_url": public_file_url(key)}
