"""Presigned PUT URLs for direct-to-bucket uploads.

The service never sees the uploaded bytes. It hands the browser a signed URL
and the object key it points at; the key comes back later in the metadata
registration call.
"""
import enum
import logging
import uuid
from dataclasses import dataclass

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..core.config import Settings

logger = logging.getLogger(__name__)

VIDEO_CONTENT_TYPE = "video/mp4"
DEFAULT_THUMBNAIL_CONTENT_TYPE = "image/jpeg"
PNG_CONTENT_TYPE = "image/png"


class UploadKind(str, enum.Enum):
    VIDEO = "video"
    THUMBNAIL = "thumbnail"

    @property
    def prefix(self) -> str:
        return "videos/" if self is UploadKind.VIDEO else "thumbnails/"


class UploadUrlError(RuntimeError):
    """Raised when the object store refuses to sign an upload URL."""


@dataclass(frozen=True)
class IssuedUpload:
    upload_url: str
    key: str
    content_type: str


def resolve_content_type(kind: UploadKind, content_type: str | None = None) -> tuple[str, str]:
    if kind is UploadKind.VIDEO:
        return VIDEO_CONTENT_TYPE, ".mp4"
    # The type is signed verbatim; the PUT must send exactly the same header.
    declared = (content_type or "").strip()
    if not declared.lower().startswith("image/") or declared.lower() == "image/":
        declared = DEFAULT_THUMBNAIL_CONTENT_TYPE
    extension = ".png" if declared.lower() == PNG_CONTENT_TYPE else ".jpg"
    return declared, extension


def generate_object_key(kind: UploadKind, extension: str) -> str:
    return f"{kind.prefix}{uuid.uuid4()}{extension}"


class UploadUrlIssuer:
    def __init__(self, client, bucket: str, expires_in: int = 3600):
        self.client = client
        self.bucket = bucket
        self.expires_in = expires_in

    def issue(self, kind: UploadKind, content_type: str | None = None) -> IssuedUpload:
        resolved_type, extension = resolve_content_type(kind, content_type)
        key = generate_object_key(kind, extension)
        try:
            url = self.client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.bucket, "Key": key, "ContentType": resolved_type},
                ExpiresIn=self.expires_in,
                HttpMethod="PUT",
            )
        except (BotoCoreError, ClientError) as exc:
            logger.exception("Failed to sign %s upload URL for %s", kind.value, key)
            raise UploadUrlError(f"Could not sign {kind.value} upload URL") from exc
        logger.info("Issued %s upload URL for %s", kind.value, key)
        return IssuedUpload(upload_url=url, key=key, content_type=resolved_type)


def build_s3_client(settings: Settings):
    kwargs = {
        "region_name": settings.aws_region,
        "config": Config(signature_version="s3v4"),
    }
    if settings.aws_access_key_id and settings.aws_secret_access_key:
        kwargs["aws_access_key_id"] = settings.aws_access_key_id
        kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
    if settings.s3_endpoint_url:
        kwargs["endpoint_url"] = settings.s3_endpoint_url
    return boto3.client("s3", **kwargs)


def build_upload_url_issuer(settings: Settings) -> UploadUrlIssuer:
    return UploadUrlIssuer(
        build_s3_client(settings),
        bucket=settings.s3_bucket_name,
        expires_in=settings.upload_url_expires_in,
    )


def public_object_url(settings: Settings, key: str) -> str:
    return f"{settings.resolved_public_bucket_url}/{key}"
