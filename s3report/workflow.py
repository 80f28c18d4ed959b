"""Report workflow: list, collect, format and send S3 metrics."""

import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, TextIO

from .collectors.s3_collector import S3MetricsCollector
from .config.models import ReportConfig
from .services.graphite_client import GraphiteClient
from .utils.logger import setup_logger
from .utils.metrics import MetricLine
from .utils.window import target_day


@dataclass
class ReportResult:
    """Outcome of one report run."""

    day: date
    lines: List[MetricLine] = field(default_factory=list)
    sent: bool = False
    bytes_sent: int = 0

    @property
    def payload(self) -> str:
        return GraphiteClient.render(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


class ReportWorkflow:
    """
    Sequential S3 report pipeline.

    Flow: collect (list + statistics) → format lines → send to Graphite.
    Any upstream or send error propagates to the caller; nothing is sent
    unless every CloudWatch call succeeded.
    """

    def __init__(
        self,
        config: ReportConfig,
        logger: logging.Logger = None,
        collector: Optional[S3MetricsCollector] = None,
        graphite_client: Optional[GraphiteClient] = None,
        out: Optional[TextIO] = None
    ):
        """
        Initialize report workflow.

        Args:
            config: Run configuration
            logger: Optional logger instance
            collector: Optional collector, built from config.credentials if omitted
            graphite_client: Optional client, built from config.graphite if omitted
            out: Stream receiving the metric lines and progress messages (default: stdout)
        """
        self.config = config
        self.logger = logger or setup_logger("workflow")
        self.collector = collector or S3MetricsCollector(config.credentials, self.logger)
        self.graphite_client = graphite_client or GraphiteClient(config.graphite, self.logger)
        self.out = out

    def run(self, now: Optional[datetime] = None) -> ReportResult:
        """
        Execute one report run.

        Args:
            now: Reference time for target day selection (default: current UTC time)

        Returns:
            ReportResult: Collected lines and whether they were sent

        Raises:
            UpstreamError: If a CloudWatch call fails
            SendError: If the Graphite write fails
        """
        start_time = time.time()
        day = target_day(now, self.config.previous_day)
        self.logger.info(
            f"Collecting S3 metrics for {day.isoformat()}",
            extra={"day": day.isoformat(), "previous_day": self.config.previous_day}
        )

        result = ReportResult(day=day, lines=self._collect_lines(day))

        if result.is_empty:
            self.logger.warning("No metrics were found for today.")
            self.logger.warning('Try running it later in the day or run with "-1" flag.')
            return result

        self._send(result)

        duration = time.time() - start_time
        self.logger.info(
            f"Report completed in {duration:.1f}s",
            extra={"lines": len(result.lines), "sent": result.sent}
        )
        return result

    def _collect_lines(self, day: date) -> List[MetricLine]:
        """Collect datapoints and format one line per available datapoint."""
        prefix = self.config.metric_prefix
        lines = []
        for descriptor, datapoint in self.collector.collect(day):
            if not datapoint.is_available:
                continue
            lines.append(MetricLine.build(prefix, descriptor, datapoint))
        return lines

    def _send(self, result: ReportResult) -> None:
        """Print the payload and write it to Graphite unless this is a dry run."""
        out = self.out or sys.stdout
        payload = result.payload
        out.write(payload)

        if self.config.dry_run:
            self.logger.info(
                "DRY RUN - skipping send to graphite server",
                extra={"address": str(self.config.graphite)}
            )
            return

        out.write(f"sending to graphite server at {self.config.graphite}:\n")
        result.bytes_sent = self.graphite_client.send(payload)
        result.sent = True
        out.write("done.\n")
