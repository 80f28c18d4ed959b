"""Pydantic configuration models for s3report."""

import socket

from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import Optional

from ..errors import ConfigurationError
from .settings import Settings


DEFAULT_GRAPHITE_ADDRESS = "127.0.0.1:2003"


class AWSCredentials(BaseModel):
    """Credentials and region used for the CloudWatch client."""
    access_key_id: str = Field(min_length=1, repr=False)
    secret_access_key: str = Field(min_length=1, repr=False)
    region: str = Field(min_length=1)

    @classmethod
    def from_env(cls) -> "AWSCredentials":
        """
        Build credentials from AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY and AWS_REGION.

        Raises:
            ConfigurationError: If any of the variables is missing or empty
        """
        Settings.validate_required()
        return cls(
            access_key_id=Settings.get("AWS_ACCESS_KEY_ID"),
            secret_access_key=Settings.get("AWS_SECRET_ACCESS_KEY"),
            region=Settings.get("AWS_REGION")
        )


class GraphiteAddress(BaseModel):
    """TCP address of the Graphite plaintext listener."""
    host: str = "127.0.0.1"
    port: int = Field(default=2003, ge=1, le=65535)

    @field_validator('host')
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Reject hosts containing whitespace."""
        if any(c.isspace() for c in v):
            raise ValueError('Host must not contain whitespace')
        return v

    @classmethod
    def parse(cls, address: str) -> "GraphiteAddress":
        """
        Parse "host:port", "[ipv6]:port" or ":port".

        An empty host means localhost.

        Args:
            address: Address string from the command line

        Returns:
            GraphiteAddress: Parsed address

        Raises:
            ConfigurationError: If the address cannot be parsed
        """
        host, sep, port = address.rpartition(':')
        if not sep or not port:
            raise ConfigurationError(
                f"Invalid graphite address {address!r}: missing port",
                details={"address": address}
            )

        if host.startswith('['):
            if not host.endswith(']'):
                raise ConfigurationError(
                    f"Invalid graphite address {address!r}: unterminated IPv6 literal",
                    details={"address": address}
                )
            host = host[1:-1]
        elif ':' in host:
            raise ConfigurationError(
                f"Invalid graphite address {address!r}: too many colons",
                details={"address": address}
            )

        if port.isdigit():
            port_number = int(port)
        else:
            try:
                port_number = socket.getservbyname(port, 'tcp')
            except OSError as e:
                raise ConfigurationError(
                    f"Invalid graphite address {address!r}: unknown port {port!r}",
                    details={"address": address}
                ) from e

        try:
            return cls(host=host or "localhost", port=port_number)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid graphite address {address!r}: {e.errors()[0]['msg']}",
                details={"address": address}
            ) from e

    def resolve(self) -> "GraphiteAddress":
        """
        Resolve the host to an IP address, using the first TCP result.

        Returns:
            GraphiteAddress: Address with a numeric host

        Raises:
            ConfigurationError: If the host cannot be resolved
        """
        try:
            infos = socket.getaddrinfo(self.host, self.port, type=socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as e:
            raise ConfigurationError(
                f"Cannot resolve graphite server {self}: {e}",
                details={"address": str(self)}
            ) from e

        if not infos:
            raise ConfigurationError(
                f"Cannot resolve graphite server {self}: no addresses",
                details={"address": str(self)}
            )

        sockaddr = infos[0][4]
        return GraphiteAddress(host=sockaddr[0], port=sockaddr[1])

    def __str__(self) -> str:
        if ':' in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class ReportConfig(BaseModel):
    """Root configuration for one report run."""
    credentials: AWSCredentials
    prefix: Optional[str] = None
    previous_day: bool = False
    graphite: GraphiteAddress = Field(default_factory=GraphiteAddress)
    dry_run: bool = False

    @staticmethod
    def default_prefix(region: str) -> str:
        """Metric path prefix used when none is given: "s3.<region>."."""
        return f"s3.{region}."

    @property
    def metric_prefix(self) -> str:
        """Prefix to apply to every metric path."""
        if self.prefix is None:
            return self.default_prefix(self.credentials.region)
        return self.prefix
