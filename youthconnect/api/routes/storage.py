"""
Object storage endpoints.

Clients upload and download directly against the object store with
presigned URLs handed out here.
"""

from fastapi import Depends, Query, Request

from ...core.auth.fastapi_users import current_active_user
from ...core.auth.models import User
from ...core.auth.roles import require_admin
from ...core.config import get_config
from ...core.dependencies import get_storage_service
from ...core.errors import NotFoundError, ValidationError
from ...core.logging import security_logger
from ...core.storage import (
    BUCKETS,
    StorageService,
    bucket_for_content_type,
    generate_object_key,
)
from ...core.storage.service import DOWNLOAD_URL_EXPIRY, UPLOAD_URL_EXPIRY
from ..models import APIResponse
from ..schemas import (
    PresignedDownloadOut,
    PresignedUploadOut,
    PresignedUploadRequest,
    StorageStatsOut,
)
from ..versioning import APIVersion, create_versioned_router

router = create_versioned_router(APIVersion.V1, prefix="/storage", tags=["storage"])


@router.post(
    "/presigned-upload",
    response_model=APIResponse[PresignedUploadOut],
    summary="Get a presigned upload URL",
)
async def presigned_upload(
    request: Request,
    body: PresignedUploadRequest,
    user: User = Depends(current_active_user),
    storage: StorageService = Depends(get_storage_service),
) -> APIResponse[PresignedUploadOut]:
    """
    Reserve an object key and return a URL the client can PUT the file to.

    The bucket follows from the content type, which must be one of the
    allowed upload types.
    """
    content_type = body.content_type.strip().lower()
    if content_type not in get_config().storage.allowed_content_types:
        raise ValidationError(
            f"Content type {body.content_type} is not allowed",
            details={"content_type": body.content_type},
        )

    bucket = bucket_for_content_type(content_type)
    key = generate_object_key(body.filename)
    upload_url = await storage.get_presigned_upload_url(bucket, key, content_type)

    security_logger.log_file_access(
        str(user.id), "presigned_upload", bucket, key, request=request
    )
    return APIResponse(
        data=PresignedUploadOut(
            upload_url=upload_url,
            bucket=bucket,
            key=key,
            public_url=storage.get_public_url(bucket, key),
            expires_in=UPLOAD_URL_EXPIRY,
        )
    )


@router.get(
    "/stats",
    response_model=APIResponse[StorageStatsOut],
    summary="Bytes stored per bucket",
)
async def storage_stats(
    request: Request,
    user: User = Depends(require_admin),
    storage: StorageService = Depends(get_storage_service),
) -> APIResponse[StorageStatsOut]:
    sizes = await storage.get_all_bucket_sizes()
    security_logger.log_admin_action(str(user.id), "view_storage_stats", request=request)
    return APIResponse(data=StorageStatsOut(buckets=sizes, total_bytes=sum(sizes.values())))


@router.get(
    "/{bucket}/url",
    response_model=APIResponse[PresignedDownloadOut],
    summary="Get a presigned download URL",
)
async def presigned_download(
    request: Request,
    bucket: str,
    key: str = Query(..., min_length=1, max_length=512),
    user: User = Depends(current_active_user),
    storage: StorageService = Depends(get_storage_service),
) -> APIResponse[PresignedDownloadOut]:
    """Return a download URL for an existing object (404 when missing)."""
    if bucket not in BUCKETS:
        raise ValidationError(f"Unknown bucket {bucket}", details={"allowed": list(BUCKETS)})
    if ".." in key or key.startswith("/"):
        raise ValidationError("Invalid object key")

    if not await storage.file_exists(bucket, key):
        raise NotFoundError(f"Object {key} not found in {bucket}")

    url = await storage.get_presigned_url(bucket, key)
    security_logger.log_file_access(
        str(user.id), "presigned_download", bucket, key, request=request
    )
    return APIResponse(
        data=PresignedDownloadOut(
            url=url, bucket=bucket, key=key, expires_in=DOWNLOAD_URL_EXPIRY
        )
    )
