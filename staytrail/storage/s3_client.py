from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from staytrail.core.config import settings
from staytrail.core.exceptions import ShareError

logger = logging.getLogger(__name__)


class S3Client:
    def __init__(
        self,
        endpoint: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        bucket: str | None = None,
        presign_ttl: int | None = None,
    ) -> None:
        """Initialize S3 client settings; the boto3 client itself is created on first use.

        Falls back to settings when parameters are omitted.
        """
        self.bucket = bucket or settings.S3_BUCKET
        self._explicit_endpoint = endpoint or settings.S3_ENDPOINT or None
        self._access_key = access_key or settings.S3_ACCESS_KEY or None
        self._secret_key = secret_key or settings.S3_SECRET_KEY or None
        self._presign_ttl = presign_ttl or settings.S3_PRESIGN_TTL
        self._client = None
        self._initialized = False

    @property
    def client(self):
        if not self._initialized:
            self._client = self._initialize_client()
            self._initialized = True
        return self._client

    def upload_file(self, path: Path, key: str, content_type: str = "application/pdf") -> str:
        """Upload a local file and return a presigned download URL."""
        client = self.client
        if client is None:
            raise ShareError("almacenamiento no configurado")
        try:
            client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=path.read_bytes(),
                ContentType=content_type,
            )
            url = client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self._presign_ttl,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.exception("S3 upload failed for %s: %s", key, exc)
            raise ShareError(str(exc)) from exc
        logger.debug("Uploaded %s to bucket %s", key, self.bucket)
        return url

    def _initialize_client(self):
        if not (self._access_key and self._secret_key):
            logger.info("S3 credentials not configured; sharing disabled")
            return None
        try:
            session = boto3.session.Session(
                aws_access_key_id=self._access_key,
                aws_secret_access_key=self._secret_key,
            )
            client_kwargs = {
                "service_name": "s3",
                "region_name": settings.S3_REGION,
                "config": Config(signature_version="s3v4"),
            }
            # Only set endpoint_url for non-AWS S3-compatible services
            if self._explicit_endpoint:
                client_kwargs["endpoint_url"] = self._explicit_endpoint
            return session.client(**client_kwargs)
        except (BotoCoreError, ClientError) as exc:
            logger.warning("Could not initialize S3 client for bucket %s: %s", self.bucket, exc)
            return None


class S3ShareTarget:
    """Shares documents by uploading them to object storage."""

    def __init__(self, s3: S3Client | None = None, enabled: bool | None = None) -> None:
        self.s3 = s3 or S3Client()
        self.enabled = settings.SHARE_ENABLED if enabled is None else enabled

    async def is_available(self) -> bool:
        if not self.enabled:
            return False
        client = await asyncio.to_thread(lambda: self.s3.client)
        return client is not None

    async def share(self, path: Path, *, mime_type: str, dialog_title: str) -> str:
        key = f"documents/{path.name}"
        logger.info("Sharing %s as %r", path, dialog_title)
        return await asyncio.to_thread(self.s3.upload_file, path, key, mime_type)
