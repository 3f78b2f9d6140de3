from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///./db.sqlite3"

    # Магазин
    merchant_system_name: str = "nopCommerce"
    store_url: str = ""
    store_scope: int = 0

    # Uniteller API
    uniteller_pay_url: str = "https://wpay.uniteller.ru/pay/"
    uniteller_results_url: str = "https://wpay.uniteller.ru/results/"
    uniteller_timeout: float = 10.0
    uniteller_retry_attempts: int = 3
    uniteller_retry_wait_max: float = 4.0

    # Настройки Uniteller по умолчанию (до сохранения через API)
    uniteller_shop_idp: str = ""
    uniteller_login: str = ""
    uniteller_password: str = ""
    uniteller_additional_fee: Decimal = Decimal("0")
    uniteller_additional_fee_percentage: bool = False

    # API платформы магазина
    host_api_url: str = "http://127.0.0.1:5000/api"
    host_api_token: str = ""
    host_timeout: float = 30.0
    primary_store_currency_id: int = 1
    checkout_completed_path: str = "/checkout/completed/{order_id}"
    order_details_path: str = "/orderdetails/{order_id}"

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_dir: str = "logs"
    log_file: str = "app.log"
    payment_log_file: str = "uniteller.log"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="UNT_",
        extra="ignore",
        env_file_encoding="utf-8",
    )


settings = Settings()
