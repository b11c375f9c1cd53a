"""
Dependencies and guards for FastAPI endpoints
"""
from typing import Generator
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from leave_app.core.config import settings
from leave_app.core.security import decode_token
from leave_app.db.session import SessionLocal
from leave_app.services.user_directory import (
    DEMO_USERS,
    DatabaseUserDirectory,
    DirectoryUser,
    StaticUserDirectory,
    UserDirectory,
)


security = HTTPBearer()


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_user_directory(db: Session = Depends(get_db)) -> UserDirectory:
    """User directory selected by settings.USER_DIRECTORY"""
    if settings.USER_DIRECTORY == "demo":
        return StaticUserDirectory(DEMO_USERS)
    return DatabaseUserDirectory(db)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    directory: UserDirectory = Depends(get_user_directory),
) -> DirectoryUser:
    """
    Get current user from the session token issued at login
    """
    try:
        payload = decode_token(credentials.credentials)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    employee_id = payload.get("sub")
    if not employee_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = directory.lookup(employee_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def require_manager(current_user: DirectoryUser = Depends(get_current_user)) -> DirectoryUser:
    """Allow only users flagged as managers"""
    if not current_user.is_manager:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Manager role required."
        )
    return current_user
