from fastapi import APIRouter

from .endpoints import auth, quiz, attempt

rpc_router = APIRouter()

rpc_router.include_router(auth.router, prefix="/auth", tags=["auth"])
rpc_router.include_router(quiz.router, prefix="/quiz", tags=["quiz"])
rpc_router.include_router(attempt.router, prefix="/attempt", tags=["attempt"])
