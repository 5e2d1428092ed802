from pydantic import BaseModel
from app.schemas.common.base import CamelModel

class AdminLoginRequest(BaseModel):
    username: str
    password: str

class AdminToken(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
