from pydantic import BaseModel


class AdminLogin(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    success: bool = True
    access_token: str
    # The storefront login script reads ``token``
    token: str
    token_type: str = "bearer"


class VerifyTokenResponse(BaseModel):
    valid: bool = True
    username: str


class UploadResponse(BaseModel):
    url: str
