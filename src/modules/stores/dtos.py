"""Store DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from modules.stores.models import DESCRIPTION_MAX_LENGTH


class CreateStoreDTO(BaseModel):
    """Immutable DTO for store creation requests.

    ``description`` is stripped and must hold 1 to 100 characters.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
