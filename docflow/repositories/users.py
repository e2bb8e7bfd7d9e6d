from sqlalchemy.orm import Session
from docflow.errors import NotFound
from docflow.models.user import User, UserCredentials


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_ids(self, ids) -> dict[int, User]:
        ids = set(ids)
        if not ids:
            return {}
        return {u.id: u for u in self.db.query(User).filter(User.id.in_(ids)).all()}

    def list(self) -> list[User]:
        return self.db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()

    def create(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user

    def update(self, user: User, **fields) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        self.db.commit()
        self.db.refresh(user)
        return user


class CredentialsRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_user_id(self, user_id: int) -> UserCredentials | None:
        return self.db.query(UserCredentials).filter(UserCredentials.user_id == user_id).first()

    def create(self, credentials: UserCredentials) -> UserCredentials:
        self.db.add(credentials)
        self.db.flush()
        return credentials
