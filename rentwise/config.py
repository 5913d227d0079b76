from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Marketplace API ---
    RENTWISE_API_URL: str = "http://localhost:5000/api"

    # Seeds the default Session only; clients never read it directly.
    # Send: Authorization: Bearer <token>
    RENTWISE_API_TOKEN: str | None = None
    RENTWISE_USER_ROLE: str | None = None  # buyer|seller|agent|renter|admin

    # None = no timeout enforcement (single attempt, wait for the server)
    HTTP_TIMEOUT_S: float | None = None

    # --- Form feedback ---
    SUBMIT_FEEDBACK_S: float = 5.0  # success/error banner window

    # --- Lists ---
    APPLICATIONS_PAGE_LIMIT: int = 10

    LOG_LEVEL: str = "INFO"


settings = Settings()
