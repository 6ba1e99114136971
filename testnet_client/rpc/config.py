#testnet_client\rpc\config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """RPC endpoint configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="IRONBIRD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Endpoint
    grpc_address: str = "http://localhost:9007"
    service_name: str = "ironbird.IronbirdService"
    request_timeout_seconds: float = 30.0

    # Default caller polling cadences
    workflow_poll_interval_seconds: float = 10.0
    template_poll_interval_seconds: float = 30.0

    def method_url(self, method: str) -> str:
        return f"{self.grpc_address.rstrip('/')}/{self.service_name}/{method}"
