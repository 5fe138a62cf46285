from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.db import get_db
from app.models.user import User
from app.schemas.user import LoginResponse, UserLogin, UserRegister, UserResponse
from app.utils.auth import (
    authenticate_user,
    create_access_token,
    get_current_user,
    get_password_hash,
)
from app.utils.exceptions import EmailAlreadyRegistered
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user. The password is stored as a bcrypt hash.
    """
    if db.query(User).filter(User.email == user.email).first():
        raise EmailAlreadyRegistered()

    db_user = User(
        fullname=user.fullname,
        email=user.email,
        hashed_password=get_password_hash(user.password),
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise EmailAlreadyRegistered()
    db.refresh(db_user)
    logger.info(f"Registered user {db_user.id}")
    return {"message": "Registration successful", "user": UserResponse.model_validate(db_user)}


@router.post("/login", response_model=LoginResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Verify email and password and return a bearer token.
    """
    user = authenticate_user(db, credentials.email, credentials.password)
    access_token = create_access_token(data={"sub": user.email})
    return {"message": "Login successful", "user": user, "access_token": access_token}


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    """Return the user the bearer token belongs to."""
    return current_user
