"""Authentication routes (register, login)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_auth_service
from api.models import AccountResponse, AuthResponse, LoginRequest, RegisterRequest
from domain.model.errors import DuplicateError, UnauthorizedError
from services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Register a new user.

    Returns:
        The created user (without password) and a JWT token

    Raises:
        HTTPException: 409 Conflict if email already exists
    """
    try:
        result = service.register(request.to_domain())
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return AuthResponse(
        message="User registered successfully",
        user=AccountResponse.from_domain(result.account),
        token=result.token,
    )


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Login user and return JWT token.

    Raises:
        HTTPException: 401 if credentials are invalid or the account is inactive
    """
    try:
        result = service.login(request.email, request.password)
    except UnauthorizedError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(
        message="Login successful",
        user=AccountResponse.from_domain(result.account),
        token=result.token,
    )
