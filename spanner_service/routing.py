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
"""Leader-aware routing header values for Spanner RPCs.

When leader-aware routing is enabled, the header below asks Spanner to route
the request to the leader replica of the database. Only RPCs that either
write or need fresh data from the leader ask for it.
"""

import immutabledict

ROUTE_TO_LEADER_HEADER = 'x-goog-spanner-route-to-leader'

_TRUE = 'true'
_FALSE = 'false'

_ROUTE_TO_LEADER = immutabledict.immutabledict({
    'get_session': _TRUE,
    'create_session': _TRUE,
    'batch_create_sessions': _TRUE,
    'delete_session': _FALSE,
    'execute_batch_dml': _TRUE,
    'partition_read': _TRUE,
    'partition_query': _TRUE,
    'commit': _TRUE,
    'rollback': _TRUE,
    'batch_write': _TRUE,
})


def route_to_leader(rpc_name: str) -> str:
  """Returns the header value for an RPC that always routes the same way.

  Raises:
    KeyError: if `rpc_name` is not a known RPC.
  """
  return _ROUTE_TO_LEADER[rpc_name]


def _read_write(is_read_write: bool) -> str:
  return _TRUE if is_read_write else _FALSE


def begin_transaction(is_read_write: bool) -> str:
  return _read_write(is_read_write)


def read(is_read_write: bool) -> str:
  return _read_write(is_read_write)


def execute_query(is_read_write: bool) -> str:
  return _read_write(is_read_write)
