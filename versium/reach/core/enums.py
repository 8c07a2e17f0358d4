"""Data tool and output type names accepted by the REACH API.

These are plain string enums; every public method also accepts the raw
string so that newly released tools can be used without a library upgrade.
"""

from enum import Enum


class AppendTool(str, Enum):
    """Append endpoints (one JSON response per input record)."""

    CONTACT = "contact"
    DEMOGRAPHIC = "demographic"
    B2C_ONLINE_AUDIENCE = "b2cOnlineAudience"
    B2B_ONLINE_AUDIENCE = "b2bOnlineAudience"
    FIRMOGRAPHIC = "firmographic"
    C2B = "c2b"
    IP_TO_DOMAIN = "iptodomain"
    HEM_TO_BUSINESS_DOMAIN = "hemtobusinessdomain"

    def __str__(self) -> str:
        return self.value


class ListgenTool(str, Enum):
    """List generation endpoints (one NDJSON stream per request)."""

    ABM = "abm"

    def __str__(self) -> str:
        return self.value


class ListgenOutputType(str, Enum):
    ABM_EMAIL = "abm_email"
    ABM_ONLINE_AUDIENCE = "abm_online_audience"

    def __str__(self) -> str:
        return self.value
