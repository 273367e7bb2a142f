"""Exception hierarchy for the scoring service."""


class ScoringError(Exception):
    """Base exception for scoring service errors."""


class LifeAreaNotFoundError(ScoringError):
    """Requested life area does not exist."""

    def __init__(self, life_area_id: str):
        super().__init__(f"Life area not found: {life_area_id}")
        self.life_area_id = life_area_id
