from typing import Optional
from sqlalchemy.orm import Session

from ..models.user import User


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.session.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter(User.email == email).first()

    def create(self, email: str, password_hash: str, name: str, role: str = "user") -> User:
        user = User(email=email, password=password_hash, name=name, role=role)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user
