# backend/routes/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from crud import dashboard as crud
from database import get_db
from models.users import User
from schemas.common import ApiResponse, ok
from schemas.dashboard import DashboardSummary
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=ApiResponse[DashboardSummary])
def dashboard_summary(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ok(crud.summary(db, current_user.id))
