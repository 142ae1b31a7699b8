"""Application settings and configuration.

This module defines all configuration options for the ADMS gateway.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Device-facing policy constants (the handshake option block, the forced
    resync interval and the device reference offset) live here so operators
    can tune them per deployment without touching the protocol code.
    """

    # Application metadata
    app_name: str = Field(default="ADMS Gateway", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Listener
    host: str = Field(default="0.0.0.0", alias="ADMS_HOST")
    port: int = Field(default=3000, alias="ADMS_PORT")

    # Time synchronization policy
    resync_interval_seconds: float = Field(
        default=5 * 60,
        alias="ADMS_RESYNC_INTERVAL_SECONDS",
    )
    device_utc_offset_hours: float = Field(
        default=6,
        alias="ADMS_DEVICE_UTC_OFFSET_HOURS",
    )

    # Handshake option block sent to devices
    stamp: str = Field(default="9999", alias="ADMS_STAMP")
    error_delay: int = Field(default=60, alias="ADMS_ERROR_DELAY")
    delay: int = Field(default=30, alias="ADMS_DELAY")
    trans_times: str = Field(default="00:00;23:59", alias="ADMS_TRANS_TIMES")
    trans_interval: int = Field(default=1, alias="ADMS_TRANS_INTERVAL")
    trans_flag: str = Field(default="1111000000", alias="ADMS_TRANS_FLAG")
    realtime: int = Field(default=1, alias="ADMS_REALTIME")
    push_prot_ver: str = Field(default="2.4.1", alias="ADMS_PUSH_PROT_VER")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def timezone_label(self) -> str:
        """Return the ``TimeZone`` option value advertised to devices.

        Whole-hour offsets are rendered without a fractional part.
        """
        offset = self.device_utc_offset_hours
        return str(int(offset)) if float(offset).is_integer() else str(offset)


settings = Settings()
