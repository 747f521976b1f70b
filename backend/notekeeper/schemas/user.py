"""
NoteKeeper Backend - User Request/Response Schemas
===================================================

What:  API contract for sign-up, sign-in, sign-out and profile.
How:   FastAPI validates request bodies against these models (422 on schema
       violations) and uses them to generate the OpenAPI docs.
"""

from pydantic import BaseModel, Field


class SignInRequest(BaseModel):
    """
    Body of PUT /user/sign-up and POST /user/sign-in.

    Length rules are checked here; business rules (duplicate username,
    wrong password) are the CredentialStore's job.
    """
    username: str = Field(min_length=1, description="Unique username")
    password: str = Field(min_length=8, description="Password (at least 8 characters)")


class ApiResponse(BaseModel):
    """Generic success/failure envelope used by the user routes."""
    success: bool = Field(description="Whether the operation succeeded")
    message: str = Field(default="", description="Human-readable outcome")


class ProfileResponse(BaseModel):
    """The signed-in user's profile."""
    success: bool = Field(default=True)
    username: str = Field(description="Username bound to the current session")
