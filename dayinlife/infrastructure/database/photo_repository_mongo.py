"""MongoDB implementation of check-in photo lookup."""

from __future__ import annotations

from typing import Any, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from dayinlife.domain.shared.errors import DatabaseError
from dayinlife.domain.timeline.events import Photo


class MongoPhotoRepository:
    """
    MongoDB implementation of IPhotoLookup.

    Storage design:
    - Collection: checkin_photos
    - Index on checkin_id (batched $in lookups)

    Example:
        >>> repository = MongoPhotoRepository(client.dayinlife)
        >>> photos = await repository.find_photos_for_checkin_ids(["42", "43"])
    """

    COLLECTION_NAME = "checkin_photos"

    def __init__(self, db: AsyncIOMotorDatabase[Any]):
        self.db = db
        self.collection = db[self.COLLECTION_NAME]
        self._indexes_created = False

    async def _ensure_indexes(self) -> None:
        if self._indexes_created:
            return

        await self.collection.create_index("checkin_id", name="idx_checkin_id")

        self._indexes_created = True

    def _from_document(self, doc: dict[str, Any]) -> Photo:
        return Photo(
            id=str(doc.get("photo_id") or doc["_id"]),
            checkin_id=str(doc["checkin_id"]),
            photo_url=doc["photo_url"],
            photo_url_cached=doc.get("photo_url_cached"),
            width=doc.get("width"),
            height=doc.get("height"),
        )

    async def find_photos_for_checkin_ids(
        self, checkin_ids: Sequence[str]
    ) -> dict[str, list[Photo]]:
        """Photos grouped by check-in id, in storage order."""
        if not checkin_ids:
            return {}

        try:
            await self._ensure_indexes()
            cursor = self.collection.find({"checkin_id": {"$in": list(checkin_ids)}})
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise DatabaseError(f"Photo lookup failed: {e}") from e

        photos: dict[str, list[Photo]] = {}
        for doc in docs:
            photo = self._from_document(doc)
            photos.setdefault(photo.checkin_id, []).append(photo)
        return photos
