from typing import Optional

from pydantic import BaseModel, Field

class Credentials(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    email: Optional[str] = None

class Message(BaseModel):
    message: str

class Profile(BaseModel):
    id: str
    email: Optional[str] = None
    total_tasks: int
    completed_tasks: int
