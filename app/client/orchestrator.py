"""Client side of the direct-to-bucket upload flow.

Two signed URLs are requested in parallel, the thumbnail and then the video
are PUT straight to object storage, and finally the metadata row is
registered with the API. A failure at any stage stops the run; objects that
were already uploaded stay in the bucket.
"""
from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from typing import Any, BinaryIO

import requests

logger = logging.getLogger(__name__)

VIDEO_CONTENT_TYPE = "video/mp4"


class UploadStage(str, enum.Enum):
    IDLE = "idle"
    REQUESTING_URLS = "requesting_urls"
    UPLOADING_THUMBNAIL = "uploading_thumbnail"
    UPLOADING_VIDEO = "uploading_video"
    REGISTERING_METADATA = "registering_metadata"
    DONE = "done"
    FAILED = "failed"


class UploadFailed(Exception):
    def __init__(self, stage: UploadStage, message: str):
        super().__init__(f"{stage.value}: {message}")
        self.stage = stage
        self.message = message


class UploadOrchestrator:
    def __init__(
        self,
        api_base_url: str,
        session: requests.Session | None = None,
        on_stage: Callable[[UploadStage], None] | None = None,
        timeout: float | None = 30.0,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self.session = session or requests.Session()
        self.on_stage = on_stage
        self.timeout = timeout
        self.stage = UploadStage.IDLE

    def _enter(self, stage: UploadStage) -> None:
        self.stage = stage
        logger.debug("Upload stage -> %s", stage.value)
        if self.on_stage is not None:
            self.on_stage(stage)

    def _fail(self, failed_stage: UploadStage, message: str) -> UploadFailed:
        self._enter(UploadStage.FAILED)
        logger.error("Upload failed while %s: %s", failed_stage.value, message)
        return UploadFailed(failed_stage, message)

    def _get_json(self, path: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        response = self.session.get(f"{self.api_base_url}{path}", params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def request_upload_urls(self, thumbnail_type: str) -> tuple[dict[str, Any], dict[str, Any]]:
        # Both GETs intentionally go through the one shared self.session.
        with ThreadPoolExecutor(max_workers=2) as pool:
            video_future = pool.submit(self._get_json, "/generate-upload-url")
            thumbnail_future = pool.submit(
                self._get_json, "/generate-thumbnail-upload-url", {"fileType": thumbnail_type}
            )
            targets = video_future.result(), thumbnail_future.result()
        for target in targets:
            if not isinstance(target, dict) or not target.get("uploadUrl") or not target.get("key"):
                raise ValueError("Malformed upload URL response")
        return targets

    def _put(self, url: str, body: bytes | BinaryIO, content_type: str) -> None:
        response = self.session.put(url, data=body, headers={"Content-Type": content_type}, timeout=self.timeout)
        if not response.ok:
            raise requests.HTTPError(f"HTTP Error: {response.status_code}", response=response)

    def upload(
        self,
        title: str,
        video: bytes | BinaryIO | None,
        thumbnail: bytes | BinaryIO | None,
        thumbnail_type: str,
        description: str | None = None,
    ) -> dict[str, Any]:
        if not title:
            raise ValueError("Please enter a title.")
        if not video:
            raise ValueError("Please select a video file.")
        if not thumbnail:
            raise ValueError("Please select a thumbnail image.")

        self._enter(UploadStage.REQUESTING_URLS)
        try:
            video_target, thumbnail_target = self.request_upload_urls(thumbnail_type)
        except (requests.RequestException, ValueError) as exc:
            raise self._fail(UploadStage.REQUESTING_URLS, "Could not get upload URLs.") from exc

        self._enter(UploadStage.UPLOADING_THUMBNAIL)
        try:
            self._put(thumbnail_target["uploadUrl"], thumbnail, thumbnail_target.get("contentType") or thumbnail_type)
        except requests.RequestException as exc:
            raise self._fail(UploadStage.UPLOADING_THUMBNAIL, "Thumbnail upload failed.") from exc

        self._enter(UploadStage.UPLOADING_VIDEO)
        try:
            self._put(video_target["uploadUrl"], video, video_target.get("contentType") or VIDEO_CONTENT_TYPE)
        except requests.RequestException as exc:
            raise self._fail(UploadStage.UPLOADING_VIDEO, "Video upload failed.") from exc

        self._enter(UploadStage.REGISTERING_METADATA)
        try:
            response = self.session.post(
                f"{self.api_base_url}/videos",
                json={
                    "title": title,
                    "description": description,
                    "s3_key": video_target["key"],
                    "thumbnail_s3_key": thumbnail_target["key"],
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
            created = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise self._fail(UploadStage.REGISTERING_METADATA, "Could not save video metadata.") from exc

        self._enter(UploadStage.DONE)
        return created
