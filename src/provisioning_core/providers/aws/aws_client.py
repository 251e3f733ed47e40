import logging
import threading
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectionClosedError,
    EndpointConnectionError,
    ReadTimeoutError,
)

from provisioning_core.config.schemas import AWSProviderConfig
from provisioning_core.domain.core.exceptions import TransientProviderError
from provisioning_core.infrastructure.exceptions import AWSError, InfrastructureError

logger = logging.getLogger(__name__)

RETRYABLE_ERROR_CODES = frozenset([
    "RequestLimitExceeded",
    "Throttling",
    "ThrottlingException",
    "InternalError",
    "ServiceUnavailable",
    "Unavailable",
    "TooManyRequestsException",
])


def error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def translate_error(error: Exception, action: str) -> Exception:
    """
    Convert a boto error into the exception callers branch on.

    Throttling, 5xx responses and connection failures become
    TransientProviderError so pollers keep trying; everything else becomes
    AWSError.

    Args:
        error: The botocore exception
        action: Human-readable description of the failed call

    Returns:
        Exception to raise
    """
    if isinstance(error, ClientError):
        status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode", 0)
        if error_code(error) in RETRYABLE_ERROR_CODES or status >= 500:
            return TransientProviderError(f"Failed to {action}: {str(error)}", details=error.response)
        return AWSError(f"Failed to {action}: {str(error)}", details=error.response)
    if isinstance(error, (EndpointConnectionError, ConnectionClosedError, ReadTimeoutError)):
        return TransientProviderError(f"Failed to {action}: {str(error)}")
    return AWSError(f"Failed to {action}: {str(error)}")


class AWSClient:
    """
    Centralized AWS client management.

    EC2 clients are created lazily, one per region, from a single session
    and shared botocore configuration.
    """

    def __init__(self, config: Optional[AWSProviderConfig] = None,
                 session: Optional[boto3.session.Session] = None):
        """
        Initialize AWS client with configuration.

        Args:
            config: AWS provider configuration
            session: Optional pre-built boto3 session
        """
        self.provider_config = config or AWSProviderConfig()
        self.region_name = self.provider_config.region
        self.session = session or boto3.session.Session(profile_name=self.provider_config.profile)
        proxies = None
        if self.provider_config.proxy_host and self.provider_config.proxy_port:
            proxies = {"https": f"http://{self.provider_config.proxy_host}:{self.provider_config.proxy_port}"}
        self.config = Config(
            retries={
                "max_attempts": self.provider_config.request_retry_attempts,
                "mode": "standard",
            },
            connect_timeout=self.provider_config.connect_timeout,
            read_timeout=self.provider_config.read_timeout,
            proxies=proxies,
        )
        self._clients: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def ec2(self, region: Optional[str] = None) -> Any:
        """EC2 client for ``region``, the default region when omitted."""
        region = region or self.region_name
        with self._lock:
            if region not in self._clients:
                self._clients[region] = self.session.client("ec2", region_name=region, config=self.config)
            return self._clients[region]

    @property
    def ec2_client(self) -> Any:
        return self.ec2()

    def validate_credentials(self) -> str:
        """
        Check that the configured credentials are usable.

        Returns:
            The caller's account id

        Raises:
            InfrastructureError: If AWS credentials validation fails
        """
        try:
            sts = self.session.client("sts", region_name=self.region_name, config=self.config)
            return sts.get_caller_identity()["Account"]
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to validate AWS credentials: %s", e)
            raise InfrastructureError(f"Failed to validate AWS credentials: {str(e)}")
