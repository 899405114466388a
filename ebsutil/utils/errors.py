import functools
from typing import Callable, Optional

from botocore.exceptions import ClientError

from ..exceptions import ProviderError


def normalize_error(err: Optional[BaseException]) -> Optional[BaseException]:
    """
    Turn an AWS client error into a single descriptive ProviderError.

    Args:
        err: Error raised by a boto3 call, or None

    Returns:
        None for None, a ProviderError for a botocore ClientError,
        and the error itself for anything else
    """
    if err is None:
        return None
    if not isinstance(err, ClientError):
        return err

    error = err.response.get("Error", {})
    metadata = err.response.get("ResponseMetadata", {})
    code = error.get("Code")
    message = error.get("Message")
    cause = err.__cause__ or err.__context__

    text = f"AWS Error: {code} {message}"
    if cause is not None:
        text += f" {cause}"
    status_code = metadata.get("HTTPStatusCode")
    request_id = metadata.get("RequestId")
    if status_code is not None and request_id:
        text += f"\n{status_code} {request_id}"

    return ProviderError(
        text,
        code=code,
        error_message=message,
        status_code=status_code,
        request_id=request_id,
        cause=err,
    )


def aws_errors(method: Callable) -> Callable:
    """
    Decorator re-raising botocore ClientErrors as normalized ProviderErrors.

    Args:
        method: The function making the AWS call

    Returns:
        The wrapped function
    """
    @functools.wraps(method)
    def _run(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except ClientError as e:
            raise normalize_error(e) from e
    return _run
