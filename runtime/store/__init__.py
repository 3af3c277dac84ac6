"""
Storage for the applog runtime.

Includes:
- log_format: line encoding/decoding and partition path resolution
- LogStore: append-only writer and level-filtered reader over the partitions
"""
