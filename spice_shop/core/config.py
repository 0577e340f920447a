from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Key-value store backing the cart
    DATABASE_URL: str = "sqlite:///./ddk_spices.db"
    # "sql" persists across restarts, "memory" keeps the cart for the process lifetime only
    CART_STORAGE_BACKEND: str = "sql"

    # Cart
    CART_STORAGE_KEY: str = "ddk_cart"
    ADDED_FEEDBACK_SECONDS: float = 2.0

    # Shop Configuration
    SHOP_NAME: str = "DDK Spices"
    WHATSAPP_NUMBER: str = "+973 35003917"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
