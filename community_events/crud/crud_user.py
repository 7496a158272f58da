# community_events/crud/crud_user.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .base import CRUDBase
from community_events.constants.participation import UserRole
from community_events.models.user import User
from community_events.schemas.user import UserProfileUpdate

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, UserProfileUpdate, UserProfileUpdate]):

    def get_or_create(
        self, db: Session, *, id: str, email: Optional[str] = None
    ) -> User:
        """
        Returns the profile for a token subject, creating an empty member
        profile on first sight.
        """
        user = self.get(db, id=id)
        if user:
            if email and not user.email:
                user.email = email
                db.commit()
                db.refresh(user)
            return user

        user = self.model(id=id, email=email, role=UserRole.MEMBER)
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request provisioned the same subject first
            db.rollback()
            logger.info(f"User {id} was provisioned concurrently")
            return self.get(db, id=id)
        db.refresh(user)
        logger.info(f"Provisioned profile for user {id}")
        return user

    def get_multi_filtered(
        self,
        db: Session,
        *,
        skip: int = 0,
        limit: int = 20,
        search: Optional[str] = None,
    ) -> Tuple[List[User], int]:
        query = db.query(self.model)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    self.model.first_name.ilike(pattern),
                    self.model.last_name.ilike(pattern),
                    self.model.email.ilike(pattern),
                )
            )

        total_count = query.count()
        users = (
            query.order_by(self.model.created_at.desc(), self.model.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return users, total_count

    def set_role(self, db: Session, *, db_obj: User, role: str) -> User:
        db_obj.role = role
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def set_newsletter_flag(self, db: Session, *, db_obj: User, subscribed: bool) -> User:
        db_obj.newsletter_subscribed = subscribed
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def count(self, db: Session) -> int:
        return db.query(self.model).count()


user = CRUDUser(User)
