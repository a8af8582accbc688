from datetime import date as Date
from typing import Optional
from pydantic import BaseModel, ConfigDict


class ResolvedDate(BaseModel):
    """A free-text date expression resolved against a reference day.

    When resolution fails ``formatted`` echoes ``original`` so the text can
    still be spoken or displayed as-is.
    """

    model_config = ConfigDict(frozen=True)

    original: str
    formatted: str
    date: Optional[Date] = None
    day_of_week: Optional[str] = None
    is_valid: bool = False

    @classmethod
    def unresolved(cls, original: str) -> "ResolvedDate":
        return cls(original=original, formatted=original)
