"""Graphite plaintext protocol client."""

import logging
import socket
from typing import Iterable

from ..config.models import GraphiteAddress
from ..errors import SendError
from ..utils.metrics import MetricLine


class GraphiteClient:
    """
    Writes metric lines to a Graphite (carbon) plaintext listener.

    One call to send() opens one TCP connection, writes the whole payload
    and closes the connection. No response is read.
    """

    def __init__(self, address: GraphiteAddress, logger: logging.Logger = None):
        """
        Initialize Graphite client.

        Args:
            address: Collector address
            logger: Optional logger instance
        """
        self.address = address
        self.logger = logger or logging.getLogger(__name__)

    @staticmethod
    def render(lines: Iterable[MetricLine]) -> str:
        """Concatenate lines into one newline-terminated payload."""
        return "".join(str(line) for line in lines)

    def send(self, payload: str) -> int:
        """
        Send a payload over a single TCP connection.

        Args:
            payload: Newline-delimited metric lines

        Returns:
            int: Number of bytes written

        Raises:
            SendError: If connecting or writing fails
        """
        try:
            data = payload.encode('ascii')
            with socket.create_connection((self.address.host, self.address.port)) as conn:
                conn.sendall(data)
        except (OSError, UnicodeError) as e:
            raise SendError(
                f"Failed to send metrics to graphite server at {self.address}: {e}",
                details={"address": str(self.address)}
            ) from e

        self.logger.info(
            f"Sent {len(data)} bytes to {self.address}",
            extra={"bytes": len(data)}
        )
        return len(data)
