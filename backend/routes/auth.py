# backend/routes/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from crud import users as crud
from database import get_db
from models.users import User
from schemas import user as schemas
from schemas.common import ApiResponse, ok
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# Register a new user and sign them in straight away
@router.post("/register", response_model=ApiResponse[schemas.AuthResult], status_code=status.HTTP_201_CREATED)
def register(payload: schemas.UserCreate, db: Session = Depends(get_db)):
    user, token = crud.register(db, payload)
    return ok({"user": user, "token": token}, message="User registered successfully")


# Authenticate user and issue JWT token
@router.post("/login", response_model=ApiResponse[schemas.AuthResult])
def login(payload: schemas.UserLogin, db: Session = Depends(get_db)):
    user, token = crud.login(db, payload)
    return ok({"user": user, "token": token}, message="Login successful")


# Retrieve current authenticated user details
@router.get("/me", response_model=ApiResponse[schemas.UserResponse])
def me(current_user: User = Depends(get_current_user)):
    return ok(current_user)
