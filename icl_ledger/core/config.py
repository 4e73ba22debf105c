from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    timezone: str = "Asia/Kolkata"

    money_places: int = 2
    decimal_precision: int = 28

    class Config:
        env_prefix = "ICL_"
        case_sensitive = False
        env_file = ".env"

settings = Settings()
