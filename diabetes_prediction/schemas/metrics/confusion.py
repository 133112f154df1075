from pydantic import BaseModel, NonNegativeInt


class ConfusionCounts(BaseModel):
    """Confusion counts of a binary classifier at a single decision threshold"""

    tp: NonNegativeInt = 0
    fp: NonNegativeInt = 0
    tn: NonNegativeInt = 0
    fn: NonNegativeInt = 0

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn

    @property
    def actual_positives(self) -> int:
        return self.tp + self.fn

    @property
    def actual_negatives(self) -> int:
        return self.fp + self.tn

    @property
    def predicted_positives(self) -> int:
        return self.tp + self.fp
