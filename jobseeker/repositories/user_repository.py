"""User accounts."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from jobseeker.db.tables import User, utcnow


class UserRepository:
    """Data access for the users table."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.session.scalars(select(User).where(User.email == email.strip().lower())).first()

    def save(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def set_resume(self, user_id: str, resume_id: str, file_name: str, uploaded_at: datetime | None = None) -> None:
        user = self.get(user_id)
        if user is None:
            return
        user.resume_id = resume_id
        user.resume_file_name = file_name
        user.resume_upload_date = uploaded_at or utcnow()
        self.session.commit()

    def clear_resume(self, user_id: str, resume_id: str) -> None:
        """Drop the user's resume pointer if it still references resume_id. The caller commits."""
        user = self.get(user_id)
        if user is None or user.resume_id != resume_id:
            return
        user.resume_id = None
        user.resume_file_name = None
        user.resume_upload_date = None
        self.session.flush()
