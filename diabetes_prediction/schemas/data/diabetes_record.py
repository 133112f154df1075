from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class DiabetesRecord(BaseModel):
    """
    Single patient record, field aliases match the csv column names

    Every feature defaults to 0, like an untouched input form
    """

    model_config = ConfigDict(populate_by_name=True)

    pregnancies: float = Field(default=0, alias="Pregnancies")
    glucose: float = Field(default=0, alias="Glucose")
    blood_pressure: float = Field(default=0, alias="BloodPressure")
    skin_thickness: float = Field(default=0, alias="SkinThickness")
    insulin: float = Field(default=0, alias="Insulin")
    bmi: float = Field(default=0, alias="BMI")
    diabetes_pedigree_function: float = Field(
        default=0, alias="DiabetesPedigreeFunction"
    )
    age: float = Field(default=0, alias="Age")

    # ground truth, absent for records entered for inference
    outcome: Optional[int] = Field(default=None, alias="Outcome", ge=0, le=1)

    def to_features(self) -> List[float]:
        return [
            self.pregnancies,
            self.glucose,
            self.blood_pressure,
            self.skin_thickness,
            self.insulin,
            self.bmi,
            self.diabetes_pedigree_function,
            self.age,
        ]
