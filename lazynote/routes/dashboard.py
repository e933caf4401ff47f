from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lazynote.core.database import get_db
from lazynote.models.user import User
from lazynote.routes.deps import get_current_user
from lazynote.schemas.dashboard import UserStatsResponse
from lazynote.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=UserStatsResponse)
def get_user_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return DashboardService(db).get_user_stats(user.id)
