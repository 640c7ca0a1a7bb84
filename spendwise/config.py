from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False

    scheduler_enabled: bool = True
    report_hour: int = 0
    # Python weekday numbering, 6 is Sunday
    weekly_report_weekday: int = 6
    monthly_report_day: int = 1

    @field_validator("report_hour")
    @classmethod
    def check_hour(cls, v: int) -> int:
        if not 0 <= v <= 23:
            raise ValueError("report_hour must be between 0 and 23")
        return v

    @field_validator("weekly_report_weekday")
    @classmethod
    def check_weekday(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError("weekly_report_weekday must be between 0 and 6")
        return v

    @field_validator("monthly_report_day")
    @classmethod
    def check_day(cls, v: int) -> int:
        if not 1 <= v <= 31:
            raise ValueError("monthly_report_day must be between 1 and 31")
        return v


settings = Settings()
