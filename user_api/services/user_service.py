# File: user_api/services/user_service.py

"""
User lifecycle and authentication workflow.

The service holds no state of its own: every call goes straight to the
database session it was built with. Collaborators are passed in by the
caller (see api.deps.get_user_service):

  - db:         SQLAlchemy session (one per request)
  - hasher:     PasswordHasher (bcrypt)
  - tokens:     TokenService (JWT)
  - translator: Translator for locale-resolved error messages
"""

import logging
import math
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from user_api.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from user_api.core.i18n import Translator
from user_api.core.security import PasswordHasher, TokenService
from user_api.models.user import User, UserRole
from user_api.schemas.user import (
    CurrentUser,
    PaginatedUsers,
    TokenResponse,
    UserCreate,
    UserRead,
    UserUpdate,
)

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        db: Session,
        hasher: PasswordHasher,
        tokens: TokenService,
        translator: Translator,
    ):
        self.db = db
        self.hasher = hasher
        self.tokens = tokens
        self.translator = translator

    def create(self, payload: UserCreate) -> UserRead:
        user = User(
            name=payload.name,
            email=payload.email,
            password=self.hasher.hash(payload.password),
            role=payload.role or UserRole.USER,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Created user id=%s role=%s", user.id, user.role.value)
        return UserRead.model_validate(user)

    def find_all(self, page: int = 1, limit: int = 10) -> PaginatedUsers:
        """
        Return one page of users ordered by id, plus page metadata.

        The slice and the total are two separate queries, so under concurrent
        writes `total` may briefly disagree with `data`.
        """
        offset = (page - 1) * limit
        users = self.db.scalars(
            select(User).order_by(User.id).limit(limit).offset(offset)
        ).all()
        total = self.db.scalar(select(func.count(User.id))) or 0

        return PaginatedUsers(
            data=[UserRead.model_validate(u) for u in users],
            total=total,
            page=page,
            limit=limit,
            totalPages=math.ceil(total / limit),
        )

    def find_one(self, user_id: int, lang: Optional[str] = None) -> UserRead:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError(self.translator.translate("USER.NOT_FOUND", lang))
        return UserRead.model_validate(user)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.scalars(select(User).where(User.email == email)).first()

    def update(
        self,
        user_id: int,
        payload: UserUpdate,
        lang: Optional[str] = None,
    ) -> UserRead:
        values = payload.model_dump(exclude_none=True)
        if "password" in values:
            values["password"] = self.hasher.hash(values["password"])
        values["updated_at"] = func.now()

        # Existence is judged from the row the UPDATE hands back
        user = self.db.scalars(
            update(User)
            .where(User.id == user_id)
            .values(**values)
            .returning(User)
            .execution_options(populate_existing=True)
        ).first()
        if user is None:
            self.db.rollback()
            raise NotFoundError(self.translator.translate("USER.NOT_FOUND", lang))

        self.db.commit()
        self.db.refresh(user)
        logger.info(
            "Updated user id=%s fields=%s",
            user_id,
            sorted(k for k in values if k != "updated_at"),
        )
        return UserRead.model_validate(user)

    def delete(
        self,
        user_id: int,
        acting_user: CurrentUser,
        lang: Optional[str] = None,
    ) -> None:
        if acting_user.role != UserRole.ADMIN:
            logger.warning(
                "User id=%s (role=%s) attempted to delete user id=%s",
                acting_user.id,
                acting_user.role.value,
                user_id,
            )
            raise ForbiddenError(self.translator.translate("USER.DELETE_FORBIDDEN", lang))

        result = self.db.execute(delete(User).where(User.id == user_id))
        if not result.rowcount:
            self.db.rollback()
            raise NotFoundError(self.translator.translate("USER.NOT_FOUND", lang))

        self.db.commit()
        logger.info("User id=%s deleted by admin id=%s", user_id, acting_user.id)

    def validate_password(self, password: str, hashed_password: str) -> bool:
        return self.hasher.verify(password, hashed_password)

    def login(
        self,
        email: str,
        password: str,
        lang: Optional[str] = None,
    ) -> TokenResponse:
        """
        Exchange credentials for an access token.

        Unknown email and wrong password raise the same UnauthorizedError.
        """
        user = self.find_by_email(email)
        if user is not None and self.validate_password(password, user.password):
            payload = {"sub": str(user.id), "email": user.email, "role": user.role.value}
            return TokenResponse(access_token=self.tokens.create_access_token(payload))

        logger.warning("Failed login attempt")
        raise UnauthorizedError(self.translator.translate("USER.INVALID_CREDENTIALS", lang))
