from pydantic_settings import BaseSettings

from timeoutlab.core.errors import ConfigurationError
from timeoutlab.strategies.base import StrategyConfig


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    APP_ENV: str = "development"

    # Delay endpoint: GET {TARGET_BASE_URL}/{status}?sleep={ms}
    TARGET_BASE_URL: str = "https://httpstat.us"

    # Timeout shared by the client_fail, context and dial strategies
    FAIL_DELAY_MS: int = 5000
    # Success-side bound; no strategy reads it yet
    SUCCESS_DELAY_MS: int = 500

    SUCCESS_SLEEP_MS: int = 1000
    FAIL_SLEEP_MS: int = 6000
    NO_TIMEOUT_SLEEP_MS: int = 300000  # the public endpoint caps sleep at 5 minutes

    # Local delay server
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8080
    SERVER_MAX_SLEEP_MS: int = 300000


settings = Settings()


def target_url(base_url: str, status: int, sleep_ms: int) -> str:
    return f"{base_url.rstrip('/')}/{status}?sleep={sleep_ms}"


def default_configs(cfg: Settings | None = None, base_url: str | None = None) -> dict[str, StrategyConfig]:
    """Build the five demo strategy configs from settings.

    Args:
        cfg: Settings to read from. Defaults to the module singleton.
        base_url: Overrides cfg.TARGET_BASE_URL, e.g. to point at a local delay server.
    """
    cfg = cfg or settings
    base = base_url or cfg.TARGET_BASE_URL

    for name in ("FAIL_DELAY_MS", "SUCCESS_SLEEP_MS", "FAIL_SLEEP_MS", "NO_TIMEOUT_SLEEP_MS"):
        value = getattr(cfg, name)
        if value < 0:
            raise ConfigurationError(f"{name} must be >= 0, got {value}")

    timeout = cfg.FAIL_DELAY_MS / 1000
    success_url = target_url(base, 200, cfg.SUCCESS_SLEEP_MS)
    fail_url = target_url(base, 504, cfg.FAIL_SLEEP_MS)

    return {
        "no_timeout": StrategyConfig(url=target_url(base, 200, cfg.NO_TIMEOUT_SLEEP_MS)),
        "client_success": StrategyConfig(url=success_url, client_timeout=timeout),
        "client_fail": StrategyConfig(url=fail_url, client_timeout=timeout),
        "context": StrategyConfig(url=fail_url, context_timeout=timeout),
        "dial": StrategyConfig(url=fail_url, dial_timeout=timeout),
    }
