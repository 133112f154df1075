from pydantic import BaseModel


class PRCurvePoint(BaseModel):
    precision: float
    recall: float


class BestF1Point(BaseModel):
    prcn: float
    rcl: float
    f1: float
    thrd: float
