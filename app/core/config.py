from pathlib import Path

from pydantic import BaseModel, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent.parent


class RunConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000

class ApiPrefixConfig(BaseModel):
    prefix: str = "/api"

class SheetsConfig(BaseModel):
    spreadsheet_id: str | None = None
    credentials_json: SecretStr | None = None # full service-account JSON, pasted as is
    sheet_name: str = "log"
    scopes: list[str] = ["https://www.googleapis.com/auth/spreadsheets"]

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.spreadsheet_id:
            missing.append("spreadsheet_id")
        if self.credentials_json is None or not self.credentials_json.get_secret_value().strip():
            missing.append("credentials_json")
        return missing


class WebhookAuthConfig(BaseModel):
    header_name: str | None = None
    header_value: SecretStr | None = None

    @property
    def enabled(self) -> bool:
        return (
            bool(self.header_name)
            and self.header_value is not None
            and bool(self.header_value.get_secret_value())
        )


class LogConfig(BaseModel):
    level: str = "INFO"
    file: Path | None = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter='__',
        env_prefix="APP_CONFIG__",
    )
    run: RunConfig = RunConfig()
    api: ApiPrefixConfig = ApiPrefixConfig()
    sheets: SheetsConfig = SheetsConfig()
    auth: WebhookAuthConfig = WebhookAuthConfig()
    log: LogConfig = LogConfig()

settings = Settings()


def get_settings() -> Settings:
    return settings
