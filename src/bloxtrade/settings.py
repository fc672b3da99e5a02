"""Client configuration via environment variables."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class ClientSettings(BaseSettings):
    model_config = {"env_prefix": "BLOXTRADE_"}

    # Value of the .ROBLOSECURITY session cookie. None means unauthenticated.
    credential: str | None = None

    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    economy_api_url: str = "https://economy.roblox.com"
    users_api_url: str = "https://users.roblox.com"
    auth_api_url: str = "https://auth.roblox.com"

    log_dir: str | None = None

    @field_validator("economy_api_url", "users_api_url", "auth_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        stripped = v.strip().rstrip("/")
        if not stripped:
            raise ValueError("API base URL must not be empty")
        return stripped
