"""Named process-wide counters.

Stored in the counters collection as {name, seq}, indexed on name - unique.
"""

from enum import StrEnum


class CounterName(StrEnum):
    """Names of the global counters."""

    SESSION_VCF_DOWNLOAD_NAME = "session_vcf_download_name"
