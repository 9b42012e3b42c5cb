"""Configuration utilities for the Share client."""

import json
import logging
import os
from functools import lru_cache
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import ClientError
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from share_client.transport import KnownShareServers

logger = logging.getLogger(__name__)


class AwsSecretsManager:
    """Utility class for retrieving secrets from AWS Secrets Manager."""

    def __init__(self, region_name: Optional[str] = None, service_env: Optional[str] = None):
        """
        Initialize AWS Secrets Manager client.

        Args:
            region_name: AWS region name
            service_env: Service environment; missing secrets are tolerated only in development
        """
        self.region_name = region_name or os.environ.get("AWS_REGION", "us-east-1")
        self.service_env = service_env or os.environ.get("SERVICE_ENV", "development")
        # Use default credentials from environment or instance profile
        self.client = boto3.client(
            service_name="secretsmanager",
            region_name=self.region_name,
            endpoint_url=os.environ.get("AWS_SECRETSMANAGER_ENDPOINT"),
        )

    def get_secret(self, secret_name: str) -> Dict[str, Any]:
        """
        Retrieve a secret from AWS Secrets Manager.

        Args:
            secret_name: Name or ARN of the secret

        Returns:
            Dict[str, Any]: Secret values as a dictionary

        Raises:
            ClientError: If the secret cannot be retrieved outside development
        """
        try:
            response = self.client.get_secret_value(SecretId=secret_name)
            if "SecretString" in response:
                return json.loads(response["SecretString"])
            else:
                raise ValueError("Binary secrets are not supported")
        except ClientError as e:
            if self.service_env == "development":
                logger.warning("Could not retrieve secret %s: %s", secret_name, e)
                return {}
            raise


def resolve_share_server(value: str) -> str:
    """
    Resolve a region name ("US", "non_us") or a base URL to a Share base URL.
    """
    if isinstance(value, KnownShareServers):
        return value.value
    name = value.strip().upper().replace("-", "_")
    if name in KnownShareServers.__members__:
        return KnownShareServers[name].value
    return value.strip().rstrip("/")


class Settings(BaseSettings):
    """Client settings loaded from environment variables and secrets."""

    # Service configuration
    service_env: str = Field("development", description="Service environment (development, staging, production)")
    log_level: str = Field("WARNING", description="Logging level")
    secret_name: Optional[str] = Field(None, description="AWS Secrets Manager secret name")
    aws_region: str = Field("us-east-1", description="AWS region")

    # Share account
    share_username: Optional[str] = Field(None, description="Share account name")
    share_password: Optional[SecretStr] = Field(None, description="Share account password")
    share_server: str = Field(KnownShareServers.US.value, description="Share region (US, NON_US) or base URL")

    # Fetch behaviour
    max_reauth_attempts: int = Field(2, ge=0, description="Re-logins allowed when a fetch returns an error object")
    request_timeout_seconds: float = Field(30.0, gt=0, description="HTTP request timeout in seconds")

    @field_validator("share_server")
    @classmethod
    def validate_share_server(cls, v: str) -> str:
        """
        Map known region names to their base URL.

        Args:
            v: Region name or base URL

        Returns:
            str: The Share base URL
        """
        if not v or not v.strip():
            raise ValueError("share_server must not be empty")
        return resolve_share_server(v)

    # Integration with AWS Secrets Manager
    def _load_secrets(self) -> None:
        """Load secrets from AWS Secrets Manager if configured."""
        if not self.secret_name or self.service_env == "development":
            return

        secrets_manager = AwsSecretsManager(self.aws_region, self.service_env)
        secrets = secrets_manager.get_secret(self.secret_name)

        for key, value in secrets.items():
            key_lower = key.lower()
            field_info = self.__class__.model_fields.get(key_lower)
            if field_info is None:
                continue
            if key_lower == "share_password" and isinstance(value, str):
                value = SecretStr(value)
            elif key_lower == "share_server":
                value = resolve_share_server(value)
            setattr(self, key_lower, value)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )

    def __init__(self, *args, **kwargs):
        """Initialize settings with secrets."""
        super().__init__(*args, **kwargs)
        self._load_secrets()


@lru_cache()
def get_settings() -> Settings:
    """
    Create and cache settings instance.

    Returns:
        Settings: Client settings
    """
    return Settings()
