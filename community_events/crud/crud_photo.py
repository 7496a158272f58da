# community_events/crud/crud_photo.py
from typing import List

from sqlalchemy.orm import Session

from .base import CRUDBase
from community_events.core.config import settings
from community_events.models.photo import Photo
from community_events.schemas.photo import PhotoCreate


class CRUDPhoto(CRUDBase[Photo, PhotoCreate, PhotoCreate]):

    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[Photo]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            .all()
        )

    def create_with_uploader(
        self, db: Session, *, obj_in: PhotoCreate, uploader_id: str
    ) -> Photo:
        create_data = obj_in.model_dump()
        if not create_data.get("public_url"):
            create_data["public_url"] = public_url_for(create_data["image"])

        db_obj = self.model(**create_data, uploaded_by_user_id=uploader_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


def public_url_for(image: str) -> str:
    """Full URLs are kept; storage paths are resolved against PHOTOS_PUBLIC_BASE_URL."""
    if image.startswith(("http://", "https://")):
        return image
    return f"{settings.PHOTOS_PUBLIC_BASE_URL.rstrip('/')}/{image.lstrip('/')}"


photo = CRUDPhoto(Photo)
