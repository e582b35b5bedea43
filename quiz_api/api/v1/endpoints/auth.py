from fastapi import APIRouter, Depends

from ..schemas import RegisterRequest, LoginRequest, AuthResponse, UserResponse, MessageResponse
from ...dependencies import get_auth_service, get_current_user
from ....core.security import AuthContext
from ....services.auth_service import AuthService

router = APIRouter()


@router.post("/register", response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    return service.register(email=request.email, password=request.password, name=request.name)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    return service.login(email=request.email, password=request.password)


@router.post("/me", response_model=UserResponse)
async def me(
    auth: AuthContext = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    return service.me(auth)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    auth: AuthContext = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    return service.logout(auth)
