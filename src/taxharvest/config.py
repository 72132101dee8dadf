from pydantic_settings import BaseSettings

from taxharvest.domain.models.gains import Commodity


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "taxharvest"
    debug: bool = True
    financial_year_starting_month: int = 4  # April, Indian fiscal year
    account_prefix: str = "Assets:"
    commodities: list[Commodity] = []  # JSON, e.g. [{"name": "NIFTY", "harvest": 365}]

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()
