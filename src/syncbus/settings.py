from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SYNCBUS_", extra="ignore")

    capacity: int = Field(default=10, description="Default capacity hint for new buses. Must be > 2.")
    copy_values: bool = Field(default=True, description="Give every reader its own copy.copy() of each value.")
    log_level: Optional[str] = Field(
        default=None,
        description="Level applied to the 'syncbus' logger when a bus is created (e.g. DEBUG).",
    )
