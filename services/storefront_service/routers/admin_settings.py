"""Admin storefront router: store settings and logo uploads."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.storefront_service.models import LogoKind
from services.storefront_service.schemas import (
    AdminStoreSettingsResponse,
    StoreSettingsUpdate,
    UploadResponse,
)
from services.storefront_service.services.store_settings import (
    get_store_settings,
    upsert_store_settings,
)
from services.storefront_service.services.uploads import (
    ImageStorage,
    UploadError,
    get_image_storage,
)
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

router = APIRouter(tags=["admin-storefront"])


@router.get("/settings", response_model=AdminStoreSettingsResponse)
async def get_admin_settings(
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    settings = await get_store_settings(db)
    if settings is None:
        return AdminStoreSettingsResponse()
    return AdminStoreSettingsResponse.model_validate(settings)


@router.patch("/settings", response_model=AdminStoreSettingsResponse)
async def update_admin_settings(
    settings_in: StoreSettingsUpdate,
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Save settings. Footer credits and developer logo are master-only."""
    changes = settings_in.model_dump(exclude_unset=True)
    if changes.get("theme") is not None:
        changes["theme"] = changes["theme"].value
    if "shop_name" in changes and changes["shop_name"] is None:
        del changes["shop_name"]
    settings = await upsert_store_settings(db, changes, current_user)
    return AdminStoreSettingsResponse.model_validate(settings)


@router.post("/settings/logo", response_model=UploadResponse)
async def upload_logo(
    kind: LogoKind = LogoKind.SHOP,
    file: UploadFile = File(...),
    current_user: AuthUser = Depends(require_admin),
    storage: ImageStorage = Depends(get_image_storage),
):
    """Upload the shop or developer logo and return its public URL."""
    if kind is LogoKind.DEVELOPER and not current_user.is_master:
        raise HTTPException(status_code=403, detail="Master privileges required")
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")

    data = await file.read()
    try:
        url, filename = await run_in_threadpool(
            storage.upload_logo, kind, data, file.filename, file.content_type
        )
    except UploadError as e:
        raise HTTPException(status_code=502, detail=f"Logo upload failed: {e}")

    return UploadResponse(url=url, filename=filename)
