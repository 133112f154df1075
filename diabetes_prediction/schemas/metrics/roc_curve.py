from pydantic import BaseModel


class ROCCurvePoint(BaseModel):
    tpr: float
    fpr: float
