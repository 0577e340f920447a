from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class ContactMessage(BaseModel):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    email: EmailStr
    message: Optional[str] = None


class ContactAck(BaseModel):
    status: str = "received"
    detail: str
