"""Application configuration via Pydantic Settings.

NOTE: Every field maps to an explicit environment variable name so a typo in
.env fails loudly instead of silently falling back to the default.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Storage
    database_url: str = Field(
        default="sqlite+aiosqlite:///cmix/noob_channel.db",
        validation_alias="DATABASE_URL",
    )
    admin_keys_dir: str = Field(default="cmix/adminKeys", validation_alias="ADMIN_KEYS_DIR")

    # Network relay
    relay_url: str = Field(default="http://localhost:8081", validation_alias="RELAY_URL")
    relay_timeout: float = Field(default=10.0, validation_alias="RELAY_TIMEOUT")
    single_use_timeout_seconds: float = Field(default=60.0, validation_alias="SINGLE_USE_TIMEOUT")
    max_message_length: int = Field(default=4096, validation_alias="MAX_MESSAGE_LENGTH")

    # Channels
    channel_cap: int = Field(default=100, validation_alias="CHANNEL_CAP")
    occupancy_reset_on_rotation: bool = Field(
        default=False,
        validation_alias="OCCUPANCY_RESET_ON_ROTATION",
    )
    rsa_key_bits: int = Field(default=2048, validation_alias="RSA_KEY_BITS")

    # Comma-separated partner ids; empty confirms every relationship request
    relationship_allow_list: str = Field(default="", validation_alias="RELATIONSHIP_ALLOW_LIST")

    # Logging
    log_path: str = Field(default="-", validation_alias="LOG_PATH")
    log_level: int = Field(default=0, validation_alias="LOG_LEVEL")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("channel_cap", "max_message_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @property
    def allowed_partners(self) -> list[str]:
        return [p.strip() for p in self.relationship_allow_list.split(",") if p.strip()]


settings = Settings()
