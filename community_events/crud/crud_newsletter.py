# community_events/crud/crud_newsletter.py
from typing import Optional

from sqlalchemy.orm import Session

from community_events.constants.participation import NewsletterStatus
from community_events.models.newsletter_subscription import NewsletterSubscription


class CRUDNewsletter:
    """One subscription row per email, flipped between states."""

    def get_by_email(self, db: Session, *, email: str) -> Optional[NewsletterSubscription]:
        return (
            db.query(NewsletterSubscription)
            .filter(NewsletterSubscription.email == email.lower())
            .first()
        )

    def subscribe(
        self, db: Session, *, email: str, user_id: Optional[str] = None
    ) -> NewsletterSubscription:
        subscription = self.get_by_email(db, email=email)
        if subscription is None:
            subscription = NewsletterSubscription(email=email.lower())
            db.add(subscription)
        subscription.status = NewsletterStatus.SUBSCRIBED
        if user_id:
            subscription.user_id = user_id
        db.commit()
        db.refresh(subscription)
        return subscription

    def unsubscribe(self, db: Session, *, email: str) -> Optional[NewsletterSubscription]:
        """Returns None when the email was never subscribed."""
        subscription = self.get_by_email(db, email=email)
        if subscription is None:
            return None
        subscription.status = NewsletterStatus.UNSUBSCRIBED
        db.commit()
        db.refresh(subscription)
        return subscription


newsletter = CRUDNewsletter()
