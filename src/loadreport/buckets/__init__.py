"""Partitioning of results into named URL buckets."""

from .collection import Bucket, BucketCollection, BucketRule

__all__ = ["Bucket", "BucketCollection", "BucketRule"]
