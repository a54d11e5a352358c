import logging
from typing import List

from fastapi import APIRouter, Depends

from app.core.errors import ApiError
from app.database import Database
from app.deps.database import get_database
from app.schemas.analytics import MonthlyFinancials
from app.services.financial_summary_service import financial_summary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/financial-summary", response_model=List[MonthlyFinancials])
def get_financial_summary(database: Database = Depends(get_database)):
    try:
        return financial_summary(database)
    except Exception as exc:
        logger.exception("Financial summary failed")
        raise ApiError(500, "Failed to fetch financial summary") from exc
