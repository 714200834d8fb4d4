"""Image asset endpoints."""

from typing import Optional, Union
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status
from starlette.datastructures import UploadFile as StarletteUploadFile

from image_assets.interfaces.http.deps import get_image_service
from image_assets.modules.images import (
    ImageAsset,
    ImageAssetError,
    ImageAssetService,
    ImageNotFoundError,
    ImageValidationError,
)
from image_assets.schemas import ImageResponse

router = APIRouter()


def _to_schema(image: ImageAsset) -> ImageResponse:
    return ImageResponse.from_domain(image)


def _as_upload(file: Union[UploadFile, str, None]) -> Optional[UploadFile]:
    # A part sent without a filename is parsed as a plain form value, not a file.
    return file if isinstance(file, StarletteUploadFile) else None


def _http_error(exc: ImageAssetError) -> HTTPException:
    if isinstance(exc, ImageValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, ImageNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("/all", response_model=list[ImageResponse], summary="List all images, newest first")
async def list_images(service: ImageAssetService = Depends(get_image_service)):
    try:
        images = await service.list_images()
    except ImageAssetError as exc:
        raise _http_error(exc) from exc
    return [_to_schema(image) for image in images]


@router.post("/add", response_model=ImageResponse, summary="Upload a new image")
async def add_image(
    file: Union[UploadFile, str, None] = File(None),
    service: ImageAssetService = Depends(get_image_service),
):
    try:
        image = await service.store_upload(_as_upload(file))
    except ImageAssetError as exc:
        raise _http_error(exc) from exc
    return _to_schema(image)


@router.put("/update/{image_id}", response_model=ImageResponse, summary="Replace an image's file")
async def update_image(
    image_id: int,
    file: Union[UploadFile, str, None] = File(None),
    service: ImageAssetService = Depends(get_image_service),
):
    try:
        image = await service.replace_upload(image_id, _as_upload(file))
    except ImageAssetError as exc:
        raise _http_error(exc) from exc
    return _to_schema(image)


@router.delete(
    "/delete/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an image",
)
async def delete_image(image_id: int, service: ImageAssetService = Depends(get_image_service)):
    try:
        await service.delete_image(image_id)
    except ImageAssetError as exc:
        raise _http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{image_id}", response_model=ImageResponse, summary="Get a single image")
async def get_image(image_id: int, service: ImageAssetService = Depends(get_image_service)):
    try:
        image = await service.get_image(image_id)
    except ImageAssetError as exc:
        raise _http_error(exc) from exc
    return _to_schema(image)


@router.get("/{image_id}/content", response_class=Response, summary="Download an image's raw bytes")
async def download_image(image_id: int, service: ImageAssetService = Depends(get_image_service)):
    try:
        image = await service.get_image(image_id)
    except ImageAssetError as exc:
        raise _http_error(exc) from exc
    return Response(
        content=image.data,
        media_type=image.content_type,
        headers={"Content-Disposition": f"inline; filename*=UTF-8''{quote(image.name)}"},
    )
