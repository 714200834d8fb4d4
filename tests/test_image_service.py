from __future__ import annotations

import asyncio

import pytest
from sqlalchemy.exc import OperationalError

from image_assets.core.config import DEFAULT_MAX_UPLOAD_BYTES
from image_assets.infrastructure.database.session import get_session_factory
from image_assets.modules.images import (
    ImageAssetService,
    ImageNotFoundError,
    ImagePayload,
    ImageStoreError,
    ImageValidationError,
)


async def test_create_then_list(service, png_payload):
    created = await service.create_image(png_payload)

    images = await service.list_images()
    assert len(images) == 1
    listed = images[0]
    assert listed.id == created.id
    assert listed.name == "pixel.png"
    assert listed.content_type == "image/png"
    assert listed.data == png_payload.data
    assert listed.created_at == created.created_at


async def test_list_empty_store(service):
    assert await service.list_images() == []


async def test_payload_of_exactly_limit_is_accepted(service):
    payload = ImagePayload(name="big.bin", data=b"\x01" * DEFAULT_MAX_UPLOAD_BYTES, content_type="image/jpeg")
    created = await service.create_image(payload)
    assert created.size_bytes == DEFAULT_MAX_UPLOAD_BYTES


async def test_payload_over_limit_is_rejected(service):
    payload = ImagePayload(name="big.bin", data=b"\x01" * (DEFAULT_MAX_UPLOAD_BYTES + 1), content_type="image/jpeg")
    with pytest.raises(ImageValidationError, match="file too large"):
        await service.create_image(payload)
    assert await service.list_images() == []


async def test_empty_payload_is_rejected(service):
    with pytest.raises(ImageValidationError, match="file required"):
        await service.create_image(ImagePayload(name="empty.png", data=b"", content_type="image/png"))
    assert await service.list_images() == []


async def test_name_and_content_type_bounds(service, png_bytes):
    with pytest.raises(ImageValidationError, match="file name too long"):
        await service.create_image(ImagePayload(name="a" * 256, data=png_bytes, content_type="image/png"))
    with pytest.raises(ImageValidationError, match="content type too long"):
        await service.create_image(ImagePayload(name="a.png", data=png_bytes, content_type="x" * 101))

    created = await service.create_image(ImagePayload(name="a" * 255, data=png_bytes, content_type="x" * 100))
    assert len(created.name) == 255


async def test_empty_name_or_content_type_is_rejected(service, png_bytes):
    with pytest.raises(ImageValidationError, match="file name required"):
        await service.create_image(ImagePayload(name="", data=png_bytes, content_type="image/png"))
    with pytest.raises(ImageValidationError, match="content type required"):
        await service.create_image(ImagePayload(name="a.png", data=png_bytes, content_type=""))
    assert await service.list_images() == []


async def test_replace_keeps_identity(service, png_payload):
    original = await service.create_image(png_payload)

    replaced = await service.replace_image(
        original.id,
        ImagePayload(name="photo.jpg", data=b"\xff\xd8\xff\xe0jpeg", content_type="image/jpeg"),
    )

    assert replaced.id == original.id
    assert replaced.created_at == original.created_at
    assert replaced.name == "photo.jpg"
    assert replaced.data == b"\xff\xd8\xff\xe0jpeg"
    assert replaced.content_type == "image/jpeg"
    assert await service.get_image(original.id) == replaced


async def test_replace_validates_payload(service, png_payload):
    original = await service.create_image(png_payload)
    with pytest.raises(ImageValidationError):
        await service.replace_image(original.id, ImagePayload(name="x.png", data=b"", content_type="image/png"))
    assert (await service.get_image(original.id)).data == png_payload.data


async def test_replace_reports_missing_id_before_invalid_payload(service):
    with pytest.raises(ImageNotFoundError) as excinfo:
        await service.replace_image(9999, ImagePayload(name="x.png", data=b"", content_type="image/png"))
    assert excinfo.value.image_id == 9999
    with pytest.raises(ImageNotFoundError):
        await service.replace_upload(9999, None)


async def test_ghost_ids_are_not_found(service, png_payload):
    existing = await service.create_image(png_payload)

    with pytest.raises(ImageNotFoundError) as excinfo:
        await service.replace_image(9999, png_payload)
    assert excinfo.value.image_id == 9999
    with pytest.raises(ImageNotFoundError):
        await service.delete_image(9999)
    with pytest.raises(ImageNotFoundError):
        await service.get_image(9999)

    assert [image.id for image in await service.list_images()] == [existing.id]


async def test_delete_is_irreversible(service, png_payload):
    doomed = await service.create_image(png_payload)
    kept = await service.create_image(png_payload)

    await service.delete_image(doomed.id)

    assert [image.id for image in await service.list_images()] == [kept.id]
    with pytest.raises(ImageNotFoundError):
        await service.replace_image(doomed.id, png_payload)
    with pytest.raises(ImageNotFoundError):
        await service.delete_image(doomed.id)
    assert [image.id for image in await service.list_images()] == [kept.id]


async def test_ids_are_not_reused_after_delete(service, png_payload):
    first = await service.create_image(png_payload)
    await service.delete_image(first.id)

    second = await service.create_image(png_payload)
    assert second.id > first.id


async def test_listing_is_newest_first_and_stable_under_replace(service, png_payload):
    t1 = await service.create_image(png_payload)
    t2 = await service.create_image(png_payload)
    t3 = await service.create_image(png_payload)

    assert [image.id for image in await service.list_images()] == [t3.id, t2.id, t1.id]

    await service.replace_image(t2.id, ImagePayload(name="new.png", data=b"new", content_type="image/png"))
    assert [image.id for image in await service.list_images()] == [t3.id, t2.id, t1.id]


async def test_bytes_round_trip_exactly(service):
    data = bytes(range(256)) * 4 + b"\x00\x00trailing nul\x00"
    created = await service.create_image(ImagePayload(name="blob.bin", data=data, content_type="application/x-test"))

    assert (await service.get_image(created.id)).data == data
    assert (await service.list_images())[0].data == data


async def test_concurrent_creates_get_distinct_ids(database, settings):
    factory = get_session_factory()

    async def create(index: int):
        async with factory() as session:
            service = ImageAssetService.with_session(session, settings)
            payload = ImagePayload(name=f"img-{index}.png", data=f"payload-{index}".encode(), content_type="image/png")
            return await service.create_image(payload)

    created = await asyncio.gather(*(create(i) for i in range(10)))

    async with factory() as session:
        images = await ImageAssetService.with_session(session, settings).list_images()

    assert len({image.id for image in created}) == 10
    assert len(images) == 10
    for image in images:
        index = image.name.removeprefix("img-").removesuffix(".png")
        assert image.data == f"payload-{index}".encode()


class _BrokenRepository:
    async def create(self, **kwargs):
        raise OperationalError("INSERT INTO images", {}, Exception("disk I/O error"))

    async def list_all(self):
        raise OperationalError("SELECT", {}, Exception("database is locked"))


async def test_store_failures_are_wrapped(session, settings, png_payload):
    service = ImageAssetService(session, _BrokenRepository(), settings.uploads)

    with pytest.raises(ImageStoreError, match="failed to create image"):
        await service.create_image(png_payload)
    with pytest.raises(ImageStoreError, match="failed to list images"):
        await service.list_images()
