"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field
from typing import Optional
from pydantic import model_validator


class GrpcSettings(BaseModel):
    host: str = "localhost"
    port: int = 50051

    @property
    def target(self) -> str:
        return f"{self.host}:{self.port}"


class RouteGuideSettings(BaseModel):
    # JSON feature database used by the RecordRoute demo (--db_path overrides)
    db_path: Optional[str] = None
    num_points: int = Field(default=10, gt=0)
    # Pacing between RecordRoute writes, inclusive bounds
    delay_min_ms: int = Field(default=500, ge=0)
    delay_max_ms: int = Field(default=1500, ge=0)
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _validate_delay_range(self):
        if self.delay_min_ms > self.delay_max_ms:
            raise ValueError(
                f"delay_min_ms ({self.delay_min_ms}) must not exceed delay_max_ms ({self.delay_max_ms})"
            )
        return self


class Settings(BaseSettings):
    """项目配置"""

    DEBUG: bool = Field(default=True)
    # Overrides the DEBUG-derived root level (e.g. "WARNING")
    LOG_LEVEL: Optional[str] = Field(default=None)

    grpc: GrpcSettings = Field(default_factory=GrpcSettings)
    route_guide: RouteGuideSettings = Field(default_factory=RouteGuideSettings)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )


settings = Settings()
