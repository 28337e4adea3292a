# Copyright 2024 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Classifies errors that callers may safely retry."""

from typing import Optional, Tuple

from google.api_core import exceptions
from google.api_core import retry as api_retry
import grpc

RST_STREAM_INTERNAL_ERROR = 'Received RST_STREAM'
EOS_INTERNAL_ERROR = 'Received unexpected EOS on DATA frame from server'

_TRANSIENT_INTERNAL_ERRORS = (RST_STREAM_INTERNAL_ERROR, EOS_INTERNAL_ERROR)


def _grpc_status(error: BaseException) -> Optional[Tuple[grpc.StatusCode, str]]:
  if not isinstance(error, grpc.RpcError) or not isinstance(error, grpc.Call):
    return None
  return error.code(), error.details() or ''


def _is_transient_internal(message: str) -> bool:
  return any(marker in message for marker in _TRANSIENT_INTERNAL_ERRORS)


def is_retryable(error: BaseException) -> bool:
  """Checks if a request can be retried based on the error it raised.

  Retryable errors are:
    - Unavailable errors
    - Internal errors caused by an unexpected EOS on a DATA frame
    - Internal errors caused by an RST_STREAM frame

  Args:
    error: The exception raised by the failed request

  Returns:
    True if the request that raised `error` can be retried
  """
  if isinstance(error, exceptions.ServiceUnavailable):
    return True
  if isinstance(error, exceptions.InternalServerError):
    return _is_transient_internal(error.message or '')

  status = _grpc_status(error)
  if status is None:
    return False
  code, details = status
  if code == grpc.StatusCode.UNAVAILABLE:
    return True
  if code == grpc.StatusCode.INTERNAL:
    return _is_transient_internal(details)
  return False


# Callers that want to retry transient failures can pass this as the `retry`
# call option. The service itself never retries.
DEFAULT_RETRY = api_retry.Retry(predicate=is_retryable)
