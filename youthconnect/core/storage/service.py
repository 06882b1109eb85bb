"""
Object storage service backed by an S3-compatible store (MinIO).

boto3 is synchronous, so every call runs in a worker thread through
``asyncio.to_thread``. Client errors surface as ``StorageError`` and missing
objects as ``NotFoundError``.
"""

import asyncio
import json
from datetime import datetime
from typing import Any, Dict, List, Optional

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..config import StorageConfig, get_config
from ..errors import NotFoundError, StorageError
from ..logging import get_logger
from .buckets import BUCKETS, bucket_for_content_type, generate_object_key, public_read_policy

logger = get_logger(__name__)

CACHE_CONTROL = "max-age=31536000"
DOWNLOAD_URL_EXPIRY = 7 * 24 * 60 * 60
UPLOAD_URL_EXPIRY = 24 * 60 * 60

_MISSING_CODES = {"404", "NoSuchKey", "NotFound", "NoSuchBucket"}


def create_s3_client(config: StorageConfig) -> Any:
    """Build a boto3 S3 client for the configured endpoint."""
    return boto3.client(
        "s3",
        endpoint_url=config.endpoint_url,
        region_name=config.region,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        use_ssl=config.use_ssl,
        config=BotoConfig(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class StorageService:
    """Async facade over the object store used for user uploads."""

    def __init__(self, client: Any = None, config: Optional[StorageConfig] = None):
        self.config = config or get_config().storage
        self.client = client if client is not None else create_s3_client(self.config)

    async def _call(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Run one client method in a thread and translate its errors."""
        method = getattr(self.client, operation)
        try:
            return await asyncio.to_thread(method, *args, **kwargs)
        except ClientError as e:
            code = _error_code(e)
            if code in _MISSING_CODES:
                raise NotFoundError(
                    "Object not found",
                    details={"bucket": kwargs.get("Bucket"), "key": kwargs.get("Key")},
                ) from e
            logger.error(
                "Object store request failed",
                operation=operation,
                bucket=kwargs.get("Bucket"),
                error_code=code,
            )
            raise StorageError(
                "Object store request failed",
                details={"operation": operation, "code": code},
            ) from e
        except BotoCoreError as e:
            logger.error(
                "Object store unreachable", operation=operation, error=str(e)
            )
            raise StorageError(
                "Object store unavailable", details={"operation": operation}
            ) from e

    async def initialize_buckets(self) -> None:
        """Create missing buckets and make every bucket publicly readable."""
        for bucket in BUCKETS:
            if not await self.bucket_exists(bucket):
                await self._call("create_bucket", Bucket=bucket)
                logger.info("Bucket created", bucket=bucket)

            await self._call(
                "put_bucket_policy",
                Bucket=bucket,
                Policy=json.dumps(public_read_policy(bucket)),
            )
        logger.info("Buckets initialized", buckets=list(BUCKETS))

    async def bucket_exists(self, bucket: str) -> bool:
        try:
            await self._call("head_bucket", Bucket=bucket)
        except NotFoundError:
            return False
        return True

    async def upload_file(
        self,
        data: bytes,
        filename: str,
        content_type: str,
        bucket: Optional[str] = None,
    ) -> Dict[str, str]:
        """
        Store a file under a freshly generated key.

        Args:
            data: File content
            filename: Original file name, used for the extension
            content_type: MIME type, also used to pick the bucket
            bucket: Explicit bucket, overriding the content type routing

        Returns:
            Dictionary with ``url``, ``bucket`` and ``key``
        """
        target = bucket or bucket_for_content_type(content_type)
        key = generate_object_key(filename)

        await self._call(
            "put_object",
            Bucket=target,
            Key=key,
            Body=data,
            ContentType=content_type,
            CacheControl=CACHE_CONTROL,
        )
        logger.info("File uploaded", bucket=target, key=key, size=len(data))
        return {"url": self.get_public_url(target, key), "bucket": target, "key": key}

    async def get_file(self, bucket: str, key: str) -> bytes:
        response = await self._call("get_object", Bucket=bucket, Key=key)
        body = response["Body"]
        try:
            return await asyncio.to_thread(body.read)
        finally:
            body.close()

    async def delete_file(self, bucket: str, key: str) -> None:
        await self._call("delete_object", Bucket=bucket, Key=key)
        logger.info("File deleted", bucket=bucket, key=key)

    async def get_file_info(self, bucket: str, key: str) -> Dict[str, Any]:
        """Size, content type, ETag and modification time of an object."""
        head = await self._call("head_object", Bucket=bucket, Key=key)
        return {
            "bucket": bucket,
            "key": key,
            "size": head.get("ContentLength", 0),
            "content_type": head.get("ContentType"),
            "etag": (head.get("ETag") or "").strip('"'),
            "last_modified": head.get("LastModified"),
        }

    async def file_exists(self, bucket: str, key: str) -> bool:
        try:
            await self._call("head_object", Bucket=bucket, Key=key)
        except NotFoundError:
            return False
        return True

    async def list_files(
        self, bucket: str, prefix: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Every object in a bucket, following pagination."""

        def _list() -> List[Dict[str, Any]]:
            paginator = self.client.get_paginator("list_objects_v2")
            params: Dict[str, Any] = {"Bucket": bucket}
            if prefix:
                params["Prefix"] = prefix

            objects = []
            for page in paginator.paginate(**params):
                for item in page.get("Contents", []):
                    last_modified: Optional[datetime] = item.get("LastModified")
                    objects.append(
                        {
                            "name": item["Key"],
                            "size": item.get("Size", 0),
                            "etag": (item.get("ETag") or "").strip('"'),
                            "last_modified": last_modified,
                        }
                    )
            return objects

        try:
            return await asyncio.to_thread(_list)
        except ClientError as e:
            if _error_code(e) in _MISSING_CODES:
                raise NotFoundError(f"Bucket {bucket} not found") from e
            raise StorageError(
                "Could not list objects", details={"bucket": bucket}
            ) from e

    async def get_presigned_url(
        self, bucket: str, key: str, expires_in: int = DOWNLOAD_URL_EXPIRY
    ) -> str:
        """Time-limited download URL, valid for seven days by default."""
        return await self._call(
            "generate_presigned_url",
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=expires_in,
        )

    async def get_presigned_upload_url(
        self,
        bucket: str,
        key: str,
        content_type: Optional[str] = None,
        expires_in: int = UPLOAD_URL_EXPIRY,
    ) -> str:
        """Time-limited PUT URL, valid for one day by default."""
        params: Dict[str, Any] = {"Bucket": bucket, "Key": key}
        if content_type:
            params["ContentType"] = content_type
        return await self._call(
            "generate_presigned_url",
            "put_object",
            Params=params,
            ExpiresIn=expires_in,
        )

    async def copy_file(
        self, source_bucket: str, source_key: str, dest_bucket: str, dest_key: str
    ) -> None:
        await self._call(
            "copy_object",
            Bucket=dest_bucket,
            Key=dest_key,
            CopySource={"Bucket": source_bucket, "Key": source_key},
        )

    def get_public_url(self, bucket: str, key: str) -> str:
        return f"{self.config.public_base_url}/{bucket}/{key}"

    async def get_bucket_size(self, bucket: str) -> int:
        """Total bytes stored in a bucket; 0 when the bucket is missing."""
        try:
            objects = await self.list_files(bucket)
        except NotFoundError:
            logger.warning("Bucket missing while computing size", bucket=bucket)
            return 0
        return sum(obj["size"] for obj in objects)

    async def get_all_bucket_sizes(self) -> Dict[str, int]:
        return {bucket: await self.get_bucket_size(bucket) for bucket in BUCKETS}
