"""Expose S3 buckets as a hierarchical filesystem tree."""
