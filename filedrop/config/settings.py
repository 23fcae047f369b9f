# filedrop/config/settings.py
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_ALLOWED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".pdf", ".txt", ".zip")


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3000

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    upload_dir: Path = Path("uploads")
    public_dir: Path = PACKAGE_ROOT / "public"

    # multipart field carrying the single file
    upload_field: str = "myfile"

    max_file_size_mb: int = 10
    download_max_age: int = 3600

    # Ex: ".png,.jpg,.pdf"
    allowed_extensions_raw: str = Field(
        default=",".join(DEFAULT_ALLOWED_EXTENSIONS),
        validation_alias="ALLOWED_EXTENSIONS",
    )

    # Extra origins for a UI served from somewhere else (dev server)
    cors_origins_raw: str = Field(
        default="http://localhost:5173,http://127.0.0.1:5173",
        validation_alias="CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("allowed_extensions_raw", "cors_origins_raw", "log_level", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @property
    def max_file_size_bytes(self) -> int:
        return max(1, self.max_file_size_mb) * 1024 * 1024

    @property
    def allowed_extensions(self) -> frozenset[str]:
        out = set()
        for part in self.allowed_extensions_raw.split(","):
            ext = part.strip().lower()
            if not ext:
                continue
            out.add(ext if ext.startswith(".") else f".{ext}")
        return frozenset(out)

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_origins_raw.split(",") if o.strip()]


def load_settings(**overrides) -> Settings:
    return Settings(**overrides)
