from typing import Optional

from pydantic import BaseModel

class Principal(BaseModel):
    """The signed-in identity that owns tasks."""

    id: str
    email: Optional[str] = None
