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
"""Conversions from python values to protobuf well-known types."""

import datetime
import decimal
from typing import Any, Dict, Mapping, Optional, Union

from google.protobuf import duration_pb2
from google.protobuf import timestamp_pb2

Number = Union[int, float, decimal.Decimal]

_NANOS_PER_SECOND = 10**9


def number_to_duration(number: Optional[Number],
                       millisecond: bool = False
                      ) -> Optional[duration_pb2.Duration]:
  """Converts a number of seconds (or milliseconds) to a Duration.

  Args:
    number: The length of the duration, or None
    millisecond: If True, `number` is a count of milliseconds instead of
      seconds

  Returns:
    The Duration, or None if `number` is None
  """
  if number is None:
    return None
  value = decimal.Decimal(str(number))
  if millisecond:
    value /= 1000
  seconds = int(value)
  nanos = int((value - seconds) * _NANOS_PER_SECOND)
  return duration_pb2.Duration(seconds=seconds, nanos=nanos)


def time_to_timestamp(
    time: Optional[datetime.datetime]) -> Optional[timestamp_pb2.Timestamp]:
  """Converts a datetime to a Timestamp. Naive datetimes are treated as UTC."""
  if time is None:
    return None
  if time.tzinfo is None:
    time = time.replace(tzinfo=datetime.timezone.utc)
  timestamp = timestamp_pb2.Timestamp()
  timestamp.FromDatetime(time)
  return timestamp


def labels_to_strings(
    labels: Optional[Mapping[Any, Any]]) -> Optional[Dict[str, str]]:
  if labels is None:
    return None
  return {str(key): str(value) for key, value in labels.items()}
