from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when credentials required for a run are missing."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "rentbill"
    version: str = "0.1.0"
    DEBUG: bool = False
    APP_DATABASE_DSN: str = "sqlite:////tmp/rentbill.db"
    REDIS_URL: str = "redis://localhost:6379"

    # Local calendar
    LOCAL_TIMEZONE: str = "Asia/Jerusalem"
    REST_WEEKDAY: int = 5  # datetime.weekday(): Saturday
    DEFAULT_CURRENCY: str = "ILS"
    OVERDUE_RUN_HOUR: int = 7

    # Pelecard card gateway
    pelecard_terminal: str = ""
    pelecard_user: str = ""
    pelecard_password: str = ""
    pelecard_url: str = "https://gateway21.pelecard.biz/services/DebitRegularType"
    pelecard_shop_number: str = "001"
    pelecard_timeout: float = 30.0

    # Hebcal holiday calendar
    hebcal_url: str = "https://www.hebcal.com/hebcal"
    hebcal_timeout: float = 5.0

    # Yemot telephony campaigns
    yemot_system_number: str = ""
    yemot_password: str = ""
    yemot_url: str = "https://www.call2all.co.il/ym/api/RunCampaign"
    yemot_template_id: str = "1267261"
    yemot_timeout: float = 15.0
    reminder_language: str = "he"  # "he" or "en"

    # Invoice business identity
    business_name: str = "דיל סלולר"
    business_id: str = "201512258"

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    @property
    def gateway_configured(self) -> bool:
        return bool(self.pelecard_terminal and self.pelecard_user and self.pelecard_password)

    @property
    def telephony_configured(self) -> bool:
        return bool(self.yemot_system_number and self.yemot_password)


settings = Settings()


def require_gateway_credentials() -> None:
    if not settings.gateway_configured:
        raise ConfigurationError("Pelecard credentials not configured")


def require_telephony_credentials() -> None:
    if not settings.telephony_configured:
        raise ConfigurationError("Yemot credentials not configured")
