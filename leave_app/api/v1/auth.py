"""
Authentication endpoints (stub: no credential verification)
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from leave_app.core.deps import get_current_user, get_user_directory
from leave_app.core.security import create_access_token
from leave_app.schemas.auth import LoginRequest, TokenResponse, UserOut
from leave_app.services.user_directory import DirectoryUser, UserDirectory

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Log in as a known user and return a session token

    The user only has to exist in the user directory.
    """
    user = directory.lookup(login_data.employee_id.strip())
    if user is None:
        logger.info("Login rejected for unknown employee %s", login_data.employee_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown employee ID"
        )

    access_token = create_access_token(data={
        "sub": user.employee_id,
        "name": user.name,
        "is_manager": user.is_manager,
    })
    logger.info("User %s logged in", user.employee_id)
    return TokenResponse(access_token=access_token, user=UserOut(**user.model_dump()))


@router.get("/me", response_model=UserOut)
async def me(current_user: DirectoryUser = Depends(get_current_user)):
    """Current user of the session token"""
    return UserOut(**current_user.model_dump())
