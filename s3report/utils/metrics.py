"""Metric data structures for the S3 report."""

import calendar
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional


class MetricKind(Enum):
    """S3 storage metrics that are reported, with their CloudWatch unit."""

    BUCKET_SIZE = ("BucketSizeBytes", "Bytes")
    OBJECT_COUNT = ("NumberOfObjects", "Count")

    def __init__(self, metric_name: str, unit: str):
        self.metric_name = metric_name
        self.unit = unit

    @classmethod
    def from_metric_name(cls, name: str) -> Optional["MetricKind"]:
        """Return the kind for a CloudWatch metric name, or None if it is not reported."""
        for kind in cls:
            if kind.metric_name == name:
                return kind
        return None

    @property
    def description(self) -> str:
        """Human-readable name used in log messages."""
        return {
            MetricKind.BUCKET_SIZE: "bucket size",
            MetricKind.OBJECT_COUNT: "object count"
        }[self]


@dataclass
class MetricDescriptor:
    """A listed metric and its dimension values."""

    metric_name: str
    bucket: str
    storage_type: str = ""  # Lower-cased StorageType dimension
    dimensions: List[Dict[str, str]] = field(default_factory=list)  # As returned by list_metrics

    @classmethod
    def from_cloudwatch(cls, entry: Dict[str, Any]) -> "MetricDescriptor":
        """
        Build a descriptor from one list_metrics entry.

        Args:
            entry: Item of the "Metrics" list in a list_metrics response

        Returns:
            MetricDescriptor: Descriptor with bucket and storage type extracted
        """
        dimensions = entry.get('Dimensions', [])
        bucket = ""
        storage_type = ""
        for dim in dimensions:
            if dim['Name'] == 'BucketName':
                bucket = dim['Value']
            elif dim['Name'] == 'StorageType':
                storage_type = dim['Value'].lower()

        return cls(
            metric_name=entry['MetricName'],
            bucket=bucket,
            storage_type=storage_type,
            dimensions=dimensions
        )

    @property
    def kind(self) -> Optional[MetricKind]:
        return MetricKind.from_metric_name(self.metric_name)


@dataclass(frozen=True)
class DataPoint:
    """
    One averaged value and its timestamp.

    A DataPoint with no timestamp is the "not available" sentinel, so that a
    missing datapoint is never confused with a value of 0.
    """

    timestamp: Optional[datetime]
    value: int = 0

    NOT_AVAILABLE: ClassVar["DataPoint"]

    @property
    def is_available(self) -> bool:
        return self.timestamp is not None

    @property
    def unix_timestamp(self) -> int:
        """Seconds since the epoch; naive timestamps are taken as UTC."""
        if self.timestamp is None:
            raise ValueError("Datapoint is not available")
        return calendar.timegm(self.timestamp.utctimetuple())


DataPoint.NOT_AVAILABLE = DataPoint(timestamp=None)


@dataclass(frozen=True)
class MetricLine:
    """A Graphite plaintext line."""

    path: str
    value: int
    timestamp: int

    @classmethod
    def build(
        cls,
        prefix: str,
        descriptor: MetricDescriptor,
        datapoint: DataPoint
    ) -> "MetricLine":
        """
        Format a collected datapoint.

        Paths:
            BucketSizeBytes: {prefix}{bucket}.{storage_type}.size
            NumberOfObjects: {prefix}{bucket}.objcount

        Raises:
            ValueError: If the descriptor is not a reported kind or the datapoint is unavailable
        """
        kind = descriptor.kind
        if kind is MetricKind.BUCKET_SIZE:
            path = f"{prefix}{descriptor.bucket}.{descriptor.storage_type}.size"
        elif kind is MetricKind.OBJECT_COUNT:
            path = f"{prefix}{descriptor.bucket}.objcount"
        else:
            raise ValueError(f"Unsupported metric: {descriptor.metric_name}")

        return cls(path=path, value=datapoint.value, timestamp=datapoint.unix_timestamp)

    def __str__(self) -> str:
        return f"{self.path} {self.value} {self.timestamp}\n"
