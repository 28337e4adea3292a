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
"""Helpers that shape keyword arguments into Spanner request fields."""

import datetime
import os
from typing import Any, Dict, Mapping, MutableMapping, Optional, Union

from google.cloud import spanner_v1
from google.protobuf import descriptor_pb2
from spanner_service import convert
from spanner_service import error
from spanner_service import routing

RESOURCE_PREFIX_HEADER = 'google-cloud-resource-prefix'

_SESSIONS_SEPARATOR = '/sessions/'

DescriptorSet = Union[descriptor_pb2.FileDescriptorSet, str, os.PathLike,
                      bytes, None]


def compact(mapping: Mapping[str, Any]) -> Dict[str, Any]:
  """Returns a copy of `mapping` without the keys whose value is None."""
  return {key: value for key, value in mapping.items() if value is not None}


def default_options(session_name: Optional[str] = None,
                    call_options: Optional[Mapping[str, Any]] = None,
                    route_to_leader: Optional[str] = None,
                    *,
                    default_prefix: Optional[str] = None,
                    default_timeout: Optional[float] = None,
                    enable_leader_aware_routing: bool = False
                   ) -> Dict[str, Any]:
  """Builds the keyword arguments passed along with a generated RPC.

  Args:
    session_name: Name of the session or database the call is made against.
      Its database portion is sent as the resource prefix header.
    call_options: Optional mapping with `timeout` and/or `retry` for this call
    route_to_leader: Value of the leader-aware routing header, or None to
      leave the header out
    default_prefix: Resource prefix used when `session_name` is not given
    default_timeout: Timeout used when `call_options` has none
    enable_leader_aware_routing: Whether the routing header may be sent at all

  Returns:
    A dict with `metadata` and, when set, `timeout` and `retry`.
  """
  metadata = []
  prefix = default_prefix
  if session_name:
    prefix = session_name.split(_SESSIONS_SEPARATOR)[0]
  if prefix:
    metadata.append((RESOURCE_PREFIX_HEADER, prefix))
  if enable_leader_aware_routing and route_to_leader is not None:
    metadata.append((routing.ROUTE_TO_LEADER_HEADER, route_to_leader))

  options = {'metadata': metadata}
  call_options = call_options or {}
  timeout = call_options.get('timeout')
  if timeout is None:
    timeout = default_timeout
  if timeout is not None:
    options['timeout'] = timeout
  # An explicit None turns off the generated client's default retry.
  if 'retry' in call_options:
    options['retry'] = call_options['retry']
  return options


def partition_options(
    partition_size_bytes: Optional[int],
    max_partitions: Optional[int]) -> Optional[spanner_v1.PartitionOptions]:
  if partition_size_bytes is None and max_partitions is None:
    return None
  return spanner_v1.PartitionOptions(
      compact({
          'partition_size_bytes': partition_size_bytes,
          'max_partitions': max_partitions,
      }))


def read_write_transaction_options(
    exclude_txn_from_change_streams: bool = False
) -> spanner_v1.TransactionOptions:
  return spanner_v1.TransactionOptions(
      read_write=spanner_v1.TransactionOptions.ReadWrite(),
      exclude_txn_from_change_streams=exclude_txn_from_change_streams)


def read_only_transaction_options(
    strong: Optional[bool] = None,
    timestamp: Optional[datetime.datetime] = None,
    staleness: Optional[convert.Number] = None
) -> spanner_v1.TransactionOptions:
  """Options for a read-only transaction that reports its read timestamp.

  At most one of `strong`, `timestamp` and `staleness` should be given; with
  none of them Spanner performs a strong read.
  """
  read_only = spanner_v1.TransactionOptions.ReadOnly(
      compact({
          'strong': strong,
          'read_timestamp': convert.time_to_timestamp(timestamp),
          'exact_staleness': convert.number_to_duration(staleness),
          'return_read_timestamp': True,
      }))
  return spanner_v1.TransactionOptions(read_only=read_only)


def partitioned_dml_transaction_options(
    exclude_txn_from_change_streams: bool = False
) -> spanner_v1.TransactionOptions:
  return spanner_v1.TransactionOptions(
      partitioned_dml=spanner_v1.TransactionOptions.PartitionedDml(),
      exclude_txn_from_change_streams=exclude_txn_from_change_streams)


def add_commit_options(
    request: MutableMapping[str, Any],
    commit_options: Optional[Mapping[str, Any]]) -> MutableMapping[str, Any]:
  """Copies the supported commit options onto a commit request.

  Args:
    request: The commit request being built. It is modified in place.
    commit_options: Optional mapping that may contain `return_commit_stats`
      and `max_commit_delay` (in milliseconds)

  Returns:
    `request`
  """
  if commit_options:
    if 'return_commit_stats' in commit_options:
      request['return_commit_stats'] = commit_options['return_commit_stats']
    if 'max_commit_delay' in commit_options:
      request['max_commit_delay'] = convert.number_to_duration(
          commit_options['max_commit_delay'], millisecond=True)
  return request


def descriptor_set_bytes(descriptor_set: DescriptorSet) -> Optional[bytes]:
  """Returns the serialized proto descriptors for a DDL update.

  Args:
    descriptor_set: A FileDescriptorSet, a path to a file holding a serialized
      FileDescriptorSet, already serialized bytes, or None

  Raises:
    UnsupportedDescriptorSetError: if `descriptor_set` is of any other type.
  """
  if descriptor_set is None:
    return None
  if isinstance(descriptor_set, descriptor_pb2.FileDescriptorSet):
    return descriptor_set.SerializeToString()
  if isinstance(descriptor_set, bytes):
    return descriptor_set
  if isinstance(descriptor_set, (str, os.PathLike)):
    with open(descriptor_set, 'rb') as descriptor_file:
      return descriptor_file.read()
  raise error.UnsupportedDescriptorSetError(
      'A value of type {} is not supported.'.format(
          type(descriptor_set).__name__))
