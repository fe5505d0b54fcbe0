"""Classification of TencentCloud API errors for retry decisions."""
from typing import FrozenSet, Optional

from tencentcloud.common.exception.tencent_cloud_sdk_exception import TencentCloudSDKException

# Errors that signal throttling, contention or a flaky network rather than a
# rejected request.
RETRYABLE_ERROR_CODES: FrozenSet[str] = frozenset({
    # client side
    "ClientNetworkError",
    "ClientError.NetworkError",
    "ClientError.HttpStatusCodeError",
    "ServerNetworkError",
    # common
    "FailedOperation",
    "TradeUnknownError",
    "RequestLimitExceeded",
    "ResourceInUse",
    "ResourceInsufficient",
    "ResourceUnavailable",
    "ResourceBusy",
    "InternalError",
})


def get_error_code(error: BaseException) -> Optional[str]:
    """Return the API error code of an SDK exception, if any."""
    if isinstance(error, TencentCloudSDKException):
        return error.get_code()
    return None


def is_retryable_error(error: BaseException) -> bool:
    """
    Decide whether a failed call may be attempted again.

    Only SDK errors whose code is known to be transient are retried. Parameter
    errors, conflicts and everything raised outside the SDK surface at once.
    """
    code = get_error_code(error)
    if code is None:
        return False
    return code in RETRYABLE_ERROR_CODES
