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
"""Instance Admin RPCs: instances, instance configs and their IAM policies."""

import logging
from typing import Any, Iterable, Mapping, Optional

from google.cloud import spanner_admin_instance_v1
from google.protobuf import field_mask_pb2
from spanner_service import api
from spanner_service import convert
from spanner_service import options

_logger = logging.getLogger(__name__)

# Fields updated by update_instance when no field mask is given.
DEFAULT_INSTANCE_FIELD_MASK = ('display_name', 'node_count', 'labels')


class InstanceAdminApi(api.SpannerServiceApi):
  """Sends requests to the Spanner Instance Admin API."""

  @property
  def _instances(self) -> spanner_admin_instance_v1.InstanceAdminClient:
    return self._connection.instance_admin_client

  def list_instances(self,
                     token: Optional[str] = None,
                     max: Optional[int] = None,  # pylint: disable=redefined-builtin
                     call_options: api.CallOptions = None):
    """Returns one page of instances in the project.

    Args:
      token: Page token from a previous response
      max: Maximum number of instances in the page
      call_options: Optional mapping with `timeout` and/or `retry`

    Returns:
      The raw ListInstancesResponse for the requested page.
    """
    request = options.compact({
        'parent': self.project_path(),
        'page_size': max,
        'page_token': token,
    })
    _logger.debug('ListInstances parent=%s', request['parent'])
    pager = self._instances.list_instances(
        request=request, **self._options(call_options=call_options))
    return api.first_page(pager)

  def get_instance(self, name: str, call_options: api.CallOptions = None):
    request = {'name': self.instance_path(name)}
    _logger.debug('GetInstance name=%s', request['name'])
    return self._instances.get_instance(
        request=request, **self._options(call_options=call_options))

  def create_instance(self,
                      instance_id: str,
                      name: Optional[str] = None,
                      config: Optional[str] = None,
                      nodes: Optional[int] = None,
                      processing_units: Optional[int] = None,
                      labels: Optional[Mapping[Any, Any]] = None,
                      call_options: api.CallOptions = None):
    """Starts creating an instance.

    Fields that are not given are left out of the new instance.

    Args:
      instance_id: ID of the new instance
      name: Display name of the instance
      config: Instance config ID or full instance config name
      nodes: Number of nodes
      processing_units: Number of processing units
      labels: Labels for the instance. Keys and values are sent as strings.
      call_options: Optional mapping with `timeout` and/or `retry`

    Returns:
      The long-running operation creating the instance.
    """
    instance = spanner_admin_instance_v1.Instance(
        options.compact({
            'display_name': name,
            'config': (self.instance_config_path(config)
                       if config is not None else None),
            'node_count': nodes,
            'processing_units': processing_units,
            'labels': convert.labels_to_strings(labels),
        }))
    request = {
        'parent': self.project_path(),
        'instance_id': instance_id,
        'instance': instance,
    }
    _logger.debug('CreateInstance parent=%s instance_id=%s',
                  request['parent'], instance_id)
    return self._instances.create_instance(
        request=request, **self._options(call_options=call_options))

  def update_instance(self,
                      instance: Any,
                      field_mask: Optional[Iterable[str]] = None,
                      call_options: api.CallOptions = None):
    """Starts updating an instance.

    Args:
      instance: The Instance with its new field values
      field_mask: Names of the fields to update. Defaults to the display name,
        node count and labels.
      call_options: Optional mapping with `timeout` and/or `retry`

    Returns:
      The long-running operation updating the instance.
    """
    field_mask = list(field_mask or ())
    if not field_mask:
      field_mask = list(DEFAULT_INSTANCE_FIELD_MASK)
    request = {
        'instance': instance,
        'field_mask': field_mask_pb2.FieldMask(paths=field_mask),
    }
    _logger.debug('UpdateInstance fields=%s', field_mask)
    return self._instances.update_instance(
        request=request, **self._options(call_options=call_options))

  def delete_instance(self, name: str, call_options: api.CallOptions = None):
    request = {'name': self.instance_path(name)}
    _logger.debug('DeleteInstance name=%s', request['name'])
    return self._instances.delete_instance(
        request=request, **self._options(call_options=call_options))

  def get_instance_policy(self, name: str,
                          call_options: api.CallOptions = None):
    request = {'resource': self.instance_path(name)}
    return self._instances.get_iam_policy(
        request=request, **self._options(call_options=call_options))

  def set_instance_policy(self,
                          name: str,
                          new_policy: Any,
                          call_options: api.CallOptions = None):
    request = {
        'resource': self.instance_path(name),
        'policy': new_policy,
    }
    return self._instances.set_iam_policy(
        request=request, **self._options(call_options=call_options))

  def test_instance_permissions(self,
                                name: str,
                                permissions: Iterable[str],
                                call_options: api.CallOptions = None):
    request = {
        'resource': self.instance_path(name),
        'permissions': list(permissions),
    }
    return self._instances.test_iam_permissions(
        request=request, **self._options(call_options=call_options))

  def list_instance_configs(self,
                            token: Optional[str] = None,
                            max: Optional[int] = None,  # pylint: disable=redefined-builtin
                            call_options: api.CallOptions = None):
    """Returns one page of instance configs as the raw response."""
    request = options.compact({
        'parent': self.project_path(),
        'page_size': max,
        'page_token': token,
    })
    _logger.debug('ListInstanceConfigs parent=%s', request['parent'])
    pager = self._instances.list_instance_configs(
        request=request, **self._options(call_options=call_options))
    return api.first_page(pager)

  def get_instance_config(self, name: str,
                          call_options: api.CallOptions = None):
    request = {'name': self.instance_config_path(name)}
    return self._instances.get_instance_config(
        request=request, **self._options(call_options=call_options))
