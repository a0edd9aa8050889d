# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Models for professor registration and login."""

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """Body of POST /registro."""

    nombre: str = Field(min_length=1, description="Full name")
    email: str = Field(min_length=1, description="Login email")
    password: str = Field(min_length=1, description="Plain text password")


class RegisterResponse(BaseModel):
    """Response of a successful registration."""

    message: str
    id_profesor: int


class LoginRequest(BaseModel):
    """Body of POST /login."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfessorProfile(BaseModel):
    """Professor data exposed to clients. Never carries the password."""

    id_profesor: int
    nombre: str
    email: str


class LoginResponse(BaseModel):
    """Response of a successful login."""

    message: str
    profesor: ProfessorProfile
