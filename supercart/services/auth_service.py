# supercart/services/auth_service.py
from sqlalchemy.orm import Session

from supercart.data.models.user import UserModel
from supercart.domain.errors import AuthenticationError, ConflictError
from supercart.domain.schemas import AuthOut, LoginIn, RegisterIn, UserRead
from supercart.repos.user_repo import UserRepo
from supercart.utils.logging import get_logger
from supercart.utils.security import create_access_token, get_password_hash, verify_password

logger = get_logger(__name__)

_BAD_CREDENTIALS = "Incorrect email or password"


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    @staticmethod
    def _issue(user: UserModel) -> AuthOut:
        token = create_access_token({"sub": user.id, "is_admin": user.is_admin})
        return AuthOut(token=token, user=UserRead.model_validate(user))

    def register(self, payload: RegisterIn) -> AuthOut:
        if self.repo.get_by_email(payload.email):
            raise ConflictError("Email is already registered")

        user = UserModel(
            name=payload.name,
            email=payload.email,
            password_hash=get_password_hash(payload.password),
        )
        created = self.repo.create_user(user)
        logger.info(f"Registered user {created.id}")
        return self._issue(created)

    def login(self, payload: LoginIn) -> AuthOut:
        user = self.repo.get_by_email(payload.email)
        # same message for unknown email and wrong password
        if not user or not verify_password(payload.password, user.password_hash):
            logger.warning(f"Failed login for {payload.email}")
            raise AuthenticationError(_BAD_CREDENTIALS)
        logger.info(f"User {user.id} logged in")
        return self._issue(user)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise LookupError("User not found")
        return UserRead.model_validate(user)
