from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..schemas.video import UploadUrlRead
from ..services.upload_urls import UploadKind, UploadUrlError, UploadUrlIssuer

router = APIRouter(tags=["uploads"])


def get_upload_url_issuer(request: Request) -> UploadUrlIssuer:
    return request.app.state.upload_url_issuer


@router.get("/generate-upload-url", response_model=UploadUrlRead)
def generate_upload_url(issuer: UploadUrlIssuer = Depends(get_upload_url_issuer)):
    try:
        issued = issuer.issue(UploadKind.VIDEO)
    except UploadUrlError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error generating upload URL")
    return {"upload_url": issued.upload_url, "key": issued.key, "content_type": issued.content_type}


@router.get("/generate-thumbnail-upload-url", response_model=UploadUrlRead)
def generate_thumbnail_upload_url(
    fileType: str | None = None,
    issuer: UploadUrlIssuer = Depends(get_upload_url_issuer),
):
    try:
        issued = issuer.issue(UploadKind.THUMBNAIL, fileType)
    except UploadUrlError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error generating thumbnail upload URL",
        )
    return {"upload_url": issued.upload_url, "key": issued.key, "content_type": issued.content_type}
