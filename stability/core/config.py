from functools import lru_cache
from typing import Any, List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_CORS = ["http://localhost:3000", "http://localhost:5173"]


def _parse_cors_origins(v: Any) -> List[str]:
    try:
        if v is None or v == "":
            return _DEFAULT_CORS.copy()
        if isinstance(v, list):
            return [x for x in v if isinstance(x, str) and x.strip()]
        s = str(v).strip()
        if not s:
            return _DEFAULT_CORS.copy()
        if s.startswith("["):
            import json
            out = json.loads(s)
            return [x for x in out if isinstance(x, str) and x.strip()] or _DEFAULT_CORS.copy()
        return [x.strip() for x in s.split(",") if x.strip()] or _DEFAULT_CORS.copy()
    except Exception:
        return _DEFAULT_CORS.copy()


def _parse_genesis(v: Any) -> dict[str, int]:
    """Accept `addr:amount,addr:amount` or a JSON object; reject malformed entries."""
    if v is None or v == "":
        return {}
    if isinstance(v, dict):
        items = v.items()
    else:
        s = str(v).strip()
        if s.startswith("{"):
            import json
            items = json.loads(s).items()
        else:
            items = []
            for part in s.split(","):
                if not part.strip():
                    continue
                if ":" not in part:
                    raise ValueError(f"genesis entry {part.strip()!r} is not address:amount")
                addr, amount = part.rsplit(":", 1)
                items.append((addr, amount))
    out: dict[str, int] = {}
    for addr, amount in items:
        addr = str(addr).strip().lower()
        amount = int(str(amount).strip())
        if not addr:
            raise ValueError("genesis entry has an empty address")
        if amount <= 0:
            raise ValueError(f"genesis amount for {addr} must be positive, got {amount}")
        out[addr] = out.get(addr, 0) + amount
    return out


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    env: str = Field(default="development", description="ENV")
    debug: bool = Field(default=False, description="DEBUG")

    # Price feed
    oracle_decimals: int = Field(default=8, alias="ORACLE_DECIMALS")
    initial_price: int = Field(default=100_000_000, alias="INITIAL_PRICE")  # 1.00 at 8 decimals

    # Collateral token
    token_name: str = Field(default="Collateral", alias="TOKEN_NAME")
    token_symbol: str = Field(default="CLT", alias="TOKEN_SYMBOL")
    token_decimals: int = Field(default=18, alias="TOKEN_DECIMALS")

    # Engine operator (may pause/unpause issuance); empty = generated at startup
    operator_address: str = Field(default="", alias="OPERATOR_ADDRESS")

    # Initial holders: "0xabc...:1000,0xdef...:50" or JSON object
    genesis_allocations_raw: str = Field(default="", alias="GENESIS_ALLOCATIONS")

    @property
    def genesis_allocations(self) -> dict[str, int]:
        return _parse_genesis(getattr(self, "genesis_allocations_raw", None))

    # Sentry
    sentry_dsn: str | None = Field(default=None, alias="SENTRY_DSN")

    # CORS: env as string, exposed as list
    cors_origins_raw: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="CORS_ORIGINS",
        description="Comma-separated or JSON list",
    )

    @property
    def cors_origins(self) -> List[str]:
        return _parse_cors_origins(getattr(self, "cors_origins_raw", None))


@lru_cache
def get_settings() -> Settings:
    return Settings()
