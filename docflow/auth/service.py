
import logging
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from docflow.auth.policy import Action, require
from docflow.errors import Conflict, Unauthorized
from docflow.models.user import Role, User, UserCredentials
from docflow.repositories.users import CredentialsRepository, UserRepository
from docflow.utils.security import Identity, TokenService, hash_password, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."


def identity_of(user: User) -> Identity:
    return Identity(id=user.id, username=user.username, email=user.email, role=Role(user.role).value)


class AuthService:
    def __init__(self, users: UserRepository, credentials: CredentialsRepository, tokens: TokenService):
        self.users = users
        self.credentials = credentials
        self.tokens = tokens

    def sign_up(self, email: str, username: str, password: str, role: Role) -> User:
        if self.users.find_by_email(email):
            raise Conflict("Email already exists")
        password_hash = hash_password(password)
        db = self.users.db
        try:
            user = self.users.create(User(email=email, username=username, role=Role(role), is_active=True))
            self.credentials.create(UserCredentials(user_id=user.id, password_hash=password_hash))
            db.commit()
        except IntegrityError:
            # a concurrent signup took the email between the check and the insert
            db.rollback()
            raise Conflict("Email already exists")
        db.refresh(user)
        logger.info("User signed up: id=%s role=%s", user.id, user.role.value)
        return user

    def verify_credentials(self, email: str, password: str) -> User:
        user = self.users.find_by_email(email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise Unauthorized(INVALID_CREDENTIALS)
        creds = self.credentials.find_by_user_id(user.id)
        if creds is None:
            logger.warning("Login failed: user %s has no credentials", user.id)
            raise Unauthorized(INVALID_CREDENTIALS)
        if not verify_password(password, creds.password_hash):
            logger.info("Login failed: bad password for user %s", user.id)
            raise Unauthorized(INVALID_CREDENTIALS)
        if not user.is_active:
            logger.info("Login failed: user %s is deactivated", user.id)
            raise Unauthorized(INVALID_CREDENTIALS)
        return user

    def login(self, email: str, password: str) -> tuple[str, User]:
        user = self.verify_credentials(email, password)
        token = self.tokens.create_access_token(identity_of(user))
        logger.info("User logged in: id=%s", user.id)
        return token, user

    def authenticate(self, token: str) -> tuple[Identity, User]:
        """Resolve a bearer token to the identity and the stored user behind it."""
        try:
            identity = self.tokens.decode_identity(token)
        except (JWTError, KeyError, ValueError):
            raise Unauthorized("Invalid or expired token")
        user = self.users.db.get(User, identity.id)
        if user is None or not user.is_active:
            raise Unauthorized("Invalid or expired token")
        return identity_of(user), user

    def list_users(self) -> list[User]:
        return self.users.list()

    def update_user(self, caller: Identity, user_id: int, fields: dict) -> User:
        require(caller.role, Action.MANAGE_USERS)
        user = self.users.get(user_id)
        allowed = {k: v for k, v in fields.items() if k in ("is_active", "role") and v is not None}
        user = self.users.update(user, **allowed)
        logger.info("User %s updated by admin %s: %s", user_id, caller.id, sorted(allowed))
        return user
