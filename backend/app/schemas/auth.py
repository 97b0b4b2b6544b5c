from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class LoginRequest(BaseModel):
    # Optional so an empty body gets the friendly 400 instead of a 422
    password: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    expires_in: int
    message: str = "Authentication successful"

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
