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
"""Shared base for the classes that issue Spanner RPCs."""

import abc
from typing import Any, Dict, Mapping, Optional

from google.cloud import spanner_admin_database_v1
from google.cloud import spanner_admin_instance_v1
from google.cloud import spanner_v1
from spanner_service import connection as connection_lib

CallOptions = Optional[Mapping[str, Any]]


def first_page(pager: Any) -> Any:
  """Returns the raw response of the first page of a generated pager."""
  return next(iter(pager.pages))


class SpannerServiceApi(abc.ABC):
  """Resource paths and call options shared by every Spanner API."""

  @property
  @abc.abstractmethod
  def _connection(self) -> connection_lib.ServiceConnection:
    raise NotImplementedError

  @property
  def project(self) -> str:
    return self._connection.project

  def _options(self,
               session_name: Optional[str] = None,
               call_options: CallOptions = None,
               route_to_leader: Optional[str] = None) -> Dict[str, Any]:
    return self._connection.call_options(
        session_name=session_name,
        call_options=call_options,
        route_to_leader=route_to_leader)

  def project_path(self) -> str:
    return spanner_admin_instance_v1.InstanceAdminClient.common_project_path(
        self.project)

  def instance_path(self, name: str) -> str:
    """Returns the full instance name, or `name` if it is already one."""
    if '/' in str(name):
      return name
    return spanner_admin_instance_v1.InstanceAdminClient.instance_path(
        self.project, name)

  def instance_config_path(self, name: str) -> str:
    """Returns the full instance config name, or `name` if already one."""
    if '/' in str(name):
      return name
    return spanner_admin_instance_v1.InstanceAdminClient.instance_config_path(
        self.project, name)

  def database_path(self, instance_id: str, database_id: str) -> str:
    return spanner_admin_database_v1.DatabaseAdminClient.database_path(
        self.project, instance_id, database_id)

  def session_path(self, instance_id: str, database_id: str,
                   session_id: str) -> str:
    return spanner_v1.SpannerClient.session_path(self.project, instance_id,
                                                 database_id, session_id)

  def backup_path(self, instance_id: str, backup_id: str) -> str:
    return spanner_admin_database_v1.DatabaseAdminClient.backup_path(
        self.project, instance_id, backup_id)
