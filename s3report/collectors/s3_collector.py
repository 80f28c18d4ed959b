"""S3 storage metrics collector via CloudWatch."""

from datetime import date
from typing import List, Optional, Tuple
import logging

import boto3
from botocore.exceptions import BotoCoreError

from ..config.models import AWSCredentials
from ..errors import ConfigurationError
from ..utils.metrics import DataPoint, MetricDescriptor, MetricKind
from ..utils.window import query_window
from .base import BaseCollector, upstream_call


S3_NAMESPACE = "AWS/S3"
STATISTICS_PERIOD = 60  # seconds


class S3MetricsCollector(BaseCollector):
    """Collector for daily S3 bucket size and object count from CloudWatch."""

    def __init__(
        self,
        config: AWSCredentials,
        logger: logging.Logger,
        cloudwatch_client=None
    ):
        """
        Initialize S3 metrics collector.

        Args:
            config: AWS credentials and region
            logger: Logger instance
            cloudwatch_client: Optional pre-built boto3 CloudWatch client
        """
        super().__init__(config, logger)
        if cloudwatch_client is not None:
            self.client = cloudwatch_client
            return

        try:
            self.client = boto3.client(
                'cloudwatch',
                region_name=config.region,
                aws_access_key_id=config.access_key_id,
                aws_secret_access_key=config.secret_access_key
            )
        except BotoCoreError as e:
            raise ConfigurationError(
                f"Cannot create CloudWatch client: {e}",
                details={"region": config.region}
            ) from e

    def collect(self, day: date) -> List[Tuple[MetricDescriptor, DataPoint]]:
        """
        Collect all reported S3 metrics for a day.

        Args:
            day: Target day

        Returns:
            List[Tuple[MetricDescriptor, DataPoint]]: Pairs in listing order;
                datapoints may be DataPoint.NOT_AVAILABLE

        Raises:
            UpstreamError: If any CloudWatch call fails
        """
        results = []
        for descriptor in self.list_metrics():
            datapoint = self.get_datapoint(descriptor, day)
            if datapoint is not None:
                results.append((descriptor, datapoint))
        return results

    @upstream_call("ListMetrics")
    def list_metrics(self) -> List[MetricDescriptor]:
        """
        List every metric in the AWS/S3 namespace.

        Only the first response page is used.

        Returns:
            List[MetricDescriptor]: Descriptors in listing order
        """
        response = self.client.list_metrics(Namespace=S3_NAMESPACE)
        metrics = response.get('Metrics', [])
        self.logger.info(f"Listed {len(metrics)} metric(s) in {S3_NAMESPACE}")
        return [MetricDescriptor.from_cloudwatch(m) for m in metrics]

    def get_bucket_size(self, descriptor: MetricDescriptor, day: date) -> DataPoint:
        """Average BucketSizeBytes for the day, or DataPoint.NOT_AVAILABLE."""
        return self._get_statistics(descriptor, MetricKind.BUCKET_SIZE, day)

    def get_object_count(self, descriptor: MetricDescriptor, day: date) -> DataPoint:
        """Average NumberOfObjects for the day, or DataPoint.NOT_AVAILABLE."""
        return self._get_statistics(descriptor, MetricKind.OBJECT_COUNT, day)

    def get_datapoint(self, descriptor: MetricDescriptor, day: date) -> Optional[DataPoint]:
        """
        Dispatch on the descriptor's metric kind.

        Returns:
            Optional[DataPoint]: None for metrics that are not reported
        """
        kind = descriptor.kind
        if kind is MetricKind.BUCKET_SIZE:
            datapoint = self.get_bucket_size(descriptor, day)
        elif kind is MetricKind.OBJECT_COUNT:
            datapoint = self.get_object_count(descriptor, day)
        else:
            return None

        if not datapoint.is_available:
            self.logger.warning(
                f"{kind.description} not available for bucket {descriptor.bucket}",
                extra={"bucket": descriptor.bucket, "day": day.isoformat()}
            )
        return datapoint

    @upstream_call("GetMetricStatistics")
    def _get_statistics(
        self,
        descriptor: MetricDescriptor,
        kind: MetricKind,
        day: date
    ) -> DataPoint:
        """
        Query the one-minute window at midnight UTC and take the first datapoint.

        Args:
            descriptor: Listed metric; its dimensions are sent back unchanged
            kind: Metric kind, selects metric name and unit
            day: Target day

        Returns:
            DataPoint: First datapoint, average truncated to an integer
        """
        start_time, end_time = query_window(day)

        response = self.client.get_metric_statistics(
            Namespace=S3_NAMESPACE,
            MetricName=kind.metric_name,
            Dimensions=descriptor.dimensions,
            StartTime=start_time,
            EndTime=end_time,
            Period=STATISTICS_PERIOD,
            Statistics=['Average'],
            Unit=kind.unit
        )

        datapoints = response.get('Datapoints', [])
        if not datapoints:
            return DataPoint.NOT_AVAILABLE

        first = datapoints[0]
        return DataPoint(timestamp=first['Timestamp'], value=int(first['Average']))
