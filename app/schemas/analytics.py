from pydantic import BaseModel


class MonthlyFinancials(BaseModel):
    month: str
    revenue: float
    expense: float
