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
"""Facade over the Spanner data, Instance Admin and Database Admin APIs."""

from typing import Any, Optional

from spanner_service import connection as connection_lib
from spanner_service import data_api
from spanner_service import retry
from spanner_service.admin import database_api
from spanner_service.admin import instance_api


class Service(data_api.SpannerDataApi, instance_api.InstanceAdminApi,
              database_api.DatabaseAdminApi):
  """Adapts keyword-style calls into requests for the generated clients.

  For example:

    service = connect('my-project')
    session = service.create_session(
        service.database_path('my-instance', 'my-database'))
    for partial in service.execute_streaming_sql(session.name, 'SELECT 1'):
      ...

  Errors raised by the generated clients are not caught here. Use
  is_retryable() (or retry.DEFAULT_RETRY) to decide whether to retry them.
  """

  def __init__(self, connection: connection_lib.ServiceConnection):
    self._service_connection = connection

  @property
  def connection(self) -> connection_lib.ServiceConnection:
    return self._service_connection

  @property
  def _connection(self) -> connection_lib.ServiceConnection:
    return self._service_connection

  @property
  def credentials(self) -> Any:
    return self._service_connection.credentials

  @property
  def timeout(self) -> Optional[float]:
    return self._service_connection.timeout

  @property
  def host(self) -> str:
    return self._service_connection.host

  @property
  def enable_leader_aware_routing(self) -> Optional[bool]:
    return self._service_connection.enable_leader_aware_routing

  @enable_leader_aware_routing.setter
  def enable_leader_aware_routing(self, value: Optional[bool]) -> None:
    self._service_connection.enable_leader_aware_routing = value

  def is_retryable(self, error: BaseException) -> bool:
    return retry.is_retryable(error)

  def __repr__(self):
    return '{}({})'.format(type(self).__name__, self.project)


def connect(project: str, credentials: Any = None, **kwargs: Any) -> Service:
  """Creates a Service with a new connection.

  Args:
    project: Project that owns the Spanner instances
    credentials: google.auth credentials, connection.INSECURE_CREDENTIALS, or
      None for the default credentials
    **kwargs: Other settings accepted by connection.ServiceConnection

  Returns:
    The new Service. Clients are created on first use.
  """
  return Service(connection_lib.ServiceConnection(project, credentials,
                                                  **kwargs))
