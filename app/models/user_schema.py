from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SessionUser(BaseModel):
    id: Optional[str] = None
    email: Optional[str] = None
    confirmed_at: Optional[datetime] = None

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed_at is not None
