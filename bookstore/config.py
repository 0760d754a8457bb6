from typing import List, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "local"
    log_level: str = "INFO"

    # Either a full URL or the postgres_* parts below
    db_url: Optional[str] = None
    postgres_user: Optional[str] = None
    postgres_password: str = ""
    postgres_db: str = "bookstore"
    postgres_host: str = "localhost"
    postgres_port: str = "5432"

    secret_key: str = "change-me"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    order_token_expire_minutes: int = 60

    cart_cookie_name: str = "bookstore_cart"
    cart_cookie_max_age: int = 7 * 24 * 60 * 60
    # keeps the signed cookie under the 4 KB browsers accept
    cart_max_lines: int = 12

    brevo_api_key: str = ""
    mail_from: str = "orders@bookstore.local"
    store_name: str = "Bookstore"
    currency: str = "Ksh"
    admin_emails: List[str] = []
    admin_alert_number: Optional[str] = None

    @property
    def database_url(self):
        if self.db_url:
            return self.db_url
        if not self.postgres_user:
            return "sqlite:///./bookstore.db"

        encoded_password = quote_plus(self.postgres_password)
        return (
            f"postgresql+psycopg2://{self.postgres_user}:"
            f"{encoded_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"


settings = Settings()
