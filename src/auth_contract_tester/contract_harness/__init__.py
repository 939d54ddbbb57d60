"""Contract harness exports."""

from .auth_contract_client import (
    JSON_CONTENT_TYPE,
    AuthContractHarness,
    HarnessNotConfiguredError,
    TransportError,
)
from .contract_assertions import (
    ContractAssertionError,
    assert_field_present,
    assert_status,
    assert_status_in,
)
from .exchange_records import ParseError, RequestContext, ResponseRecord

__all__ = [
    "JSON_CONTENT_TYPE",
    "AuthContractHarness",
    "HarnessNotConfiguredError",
    "TransportError",
    "ContractAssertionError",
    "assert_field_present",
    "assert_status",
    "assert_status_in",
    "ParseError",
    "RequestContext",
    "ResponseRecord",
]
