from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Plain string: anything that is not the demo address is a failed login, not a 422
    email: str
    password: str


class AuthResponse(BaseModel):
    success: bool
    message: str
