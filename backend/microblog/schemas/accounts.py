"""Account Schemas — registration and credential-check payloads."""

from pydantic import BaseModel


class RegisterAccountRequest(BaseModel):
    username: str
    email: str
    password: str


class RegisterAccountResponse(BaseModel):
    id: str


class CredentialsRequest(BaseModel):
    username: str
    password: str


class CredentialsResponse(BaseModel):
    user_id: str
