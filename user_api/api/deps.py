# File: user_api/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends, Header, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from user_api.core.exceptions import UnauthorizedError
from user_api.core.i18n import Translator, parse_accept_language
from user_api.schemas.user import CurrentUser
from user_api.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_translator(request: Request) -> Translator:
    return request.app.state.translator


def get_lang(
    lang: Optional[str] = Query(None, description="Language for error messages"),
    accept_language: Optional[str] = Header(None),
) -> Optional[str]:
    """`?lang=` wins over Accept-Language; None means the default language."""
    return lang or parse_accept_language(accept_language)


def get_user_service(request: Request, db: Session = Depends(get_db)) -> UserService:
    state = request.app.state
    return UserService(
        db=db,
        hasher=state.hasher,
        tokens=state.tokens,
        translator=state.translator,
    )


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    lang: Optional[str] = Depends(get_lang),
) -> CurrentUser:
    translator: Translator = request.app.state.translator
    unauthorized = UnauthorizedError(translator.translate("AUTH.UNAUTHORIZED", lang))

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise unauthorized

    try:
        payload = request.app.state.tokens.decode_access_token(credentials.credentials)
        return CurrentUser(
            id=int(payload["sub"]),
            email=payload["email"],
            role=payload["role"],
        )
    except (JWTError, KeyError, ValueError, TypeError):
        raise unauthorized
