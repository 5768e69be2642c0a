from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from expense_tracker.api.deps import current_user, get_db
from expense_tracker.schemas.auth import AuthResponse, LoginRequest, MessageResponse, RegisterRequest
from expense_tracker.services import auth_service
from expense_tracker.services.auth_service import AuthContext

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user, token = auth_service.register(db, payload.name, payload.email, payload.password)
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user, token = auth_service.login(db, payload.email, payload.password)
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(ctx: AuthContext = Depends(current_user), db: Session = Depends(get_db)):
    auth_service.logout(db, ctx)
    return MessageResponse(message="Logged out")
