from pydantic import BaseModel
from typing import List, Optional

from summercamp.services.catalog import CampWindow, Plan


class PlanOut(BaseModel):
    name: str
    description: str
    price: float
    features: List[str]
    popular: bool = False
    durationDays: Optional[int] = None
    fullAccess: bool = False

    @classmethod
    def from_plan(cls, p: Plan) -> "PlanOut":
        return cls(
            name=p.name,
            description=p.description,
            price=float(p.price),
            features=list(p.features),
            popular=p.popular,
            durationDays=p.duration_days,
            fullAccess=p.full_access,
        )


class CampWindowOut(BaseModel):
    start: str
    end: str
    weekdays: List[int]

    @classmethod
    def from_window(cls, w: CampWindow) -> "CampWindowOut":
        return cls(start=w.start.isoformat(), end=w.end.isoformat(), weekdays=sorted(w.weekdays))


class PlanListOut(BaseModel):
    product: str
    location: str
    currency: str
    window: Optional[CampWindowOut] = None
    plans: List[PlanOut]
