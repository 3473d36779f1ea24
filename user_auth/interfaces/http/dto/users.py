from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UpdateUserRequestDTO(BaseModel):
    name: str | None = Field(default=None, max_length=128)
    email: str | None = Field(default=None, max_length=254)
    password: str | None = Field(default=None, max_length=128)

    model_config = ConfigDict(extra="ignore")
