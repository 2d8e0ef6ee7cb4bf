# app/routes/auth.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..models import LoginRequest, MessageResponse, TokenResponse, VerifyResponse
from ..security import (
    AuthError,
    UserDirectory,
    authenticate_user,
    create_access_token,
    get_user_directory,
    verify_access_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

# auto_error=False so a missing header is a 401 like any other bad token
bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED = {401: {"model": MessageResponse}}


# bcrypt verification must not run on the event loop, so handlers are plain def
@router.post("", response_model=TokenResponse, summary="Authenticate user and return JWT token", responses=UNAUTHORIZED)
def login(payload: LoginRequest, directory: UserDirectory = Depends(get_user_directory)):
    try:
        user = authenticate_user(directory, payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    logger.info(f"Issued token for {user.email}")
    return {"token": create_access_token(user.email)}


@router.get("/verify", response_model=VerifyResponse, summary="Verify JWT token", responses=UNAUTHORIZED)
def verify(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    directory: UserDirectory = Depends(get_user_directory)
):
    """
    Validates the bearer token and returns its email claim.

    Profile fields (name, role, permissions) are looked up in the user
    directory by that email; they are not carried inside the token.
    """
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    try:
        claims = verify_access_token(credentials.credentials)
    except AuthError:
        logger.warning("Rejected invalid or expired token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    response = {"email": claims["email"]}
    user = directory.get_by_email(claims["email"])
    if user is not None:
        response.update(name=user.name, role=user.role, permissions=list(user.permissions))
    return response
