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
"""Builds the gRPC channel and generated clients used to talk to Spanner."""

import logging
import os
from typing import Any, Dict, Mapping, Optional

from google.api_core.gapic_v1 import client_info as client_info_lib
from google.auth import credentials as auth_credentials
from google.cloud import spanner_admin_database_v1
from google.cloud import spanner_admin_instance_v1
from google.cloud import spanner_v1
from google.cloud.spanner_admin_database_v1.services.database_admin import transports as database_transports
from google.cloud.spanner_admin_instance_v1.services.instance_admin import transports as instance_transports
from google.cloud.spanner_v1.services.spanner import transports as spanner_transports
import grpc
from spanner_service import options
from spanner_service import version

_logger = logging.getLogger(__name__)

# Passing this value as the credentials makes the connection use an insecure
# channel, e.g. for the Spanner emulator.
INSECURE_CREDENTIALS = 'this_channel_is_insecure'

# Environment variable naming the universe domain of the Spanner endpoint.
UNIVERSE_DOMAIN_ENV_VAR = 'GOOGLE_CLOUD_UNIVERSE_DOMAIN'
# Environment variable set to the host:port of a running Spanner emulator.
EMULATOR_HOST_ENV_VAR = 'SPANNER_EMULATOR_HOST'

DEFAULT_UNIVERSE_DOMAIN = 'googleapis.com'
_ENDPOINT_TEMPLATE = 'spanner.{universe_domain}'
_DEFAULT_PORT = 443

_LIB_NAME = 'gccl'

_CHANNEL_ARGS = (('grpc.service_config_disable_resolution', 1),)


class ServiceConnection:
  """Holds the settings for, and lazily creates, the Spanner gRPC clients.

  Each generated client is created on first use and reused afterwards. Tests
  may set the `mocked_*` attributes to replace a client.
  """

  def __init__(
      self,
      project: str,
      credentials: Any = None,
      *,
      quota_project: Optional[str] = None,
      host: Optional[str] = None,
      timeout: Optional[float] = None,
      lib_name: Optional[str] = None,
      lib_version: Optional[str] = None,
      enable_leader_aware_routing: Optional[bool] = None,
      universe_domain: Optional[str] = None,
  ):
    """Stores the connection settings.

    Args:
      project: Project that owns the Spanner instances
      credentials: google.auth credentials, INSECURE_CREDENTIALS for a
        plaintext channel, or None for the default credentials. When None and
        SPANNER_EMULATOR_HOST is set, connects to the emulator instead.
      quota_project: Project billed for quota. Defaults to the quota project
        of `credentials`, if any.
      host: Endpoint to connect to. Defaults to the Spanner endpoint of the
        universe domain.
      timeout: Default timeout in seconds for every call
      lib_name: Name of the library using this connection, reported in the
        client headers
      lib_version: Version of `lib_name`
      enable_leader_aware_routing: Whether to send leader-aware routing hints
      universe_domain: Universe domain of the Spanner endpoint. Defaults to
        GOOGLE_CLOUD_UNIVERSE_DOMAIN, then googleapis.com.
    """
    emulator_host = os.environ.get(EMULATOR_HOST_ENV_VAR)
    if credentials is None and emulator_host:
      credentials = INSECURE_CREDENTIALS
      host = host or emulator_host

    self.project = project
    self.credentials = credentials
    self.quota_project = quota_project or getattr(credentials,
                                                  'quota_project_id', None)
    self.universe_domain = (
        universe_domain or os.environ.get(UNIVERSE_DOMAIN_ENV_VAR) or
        DEFAULT_UNIVERSE_DOMAIN)
    self.host = host or _ENDPOINT_TEMPLATE.format(
        universe_domain=self.universe_domain)
    self.timeout = timeout
    self.lib_name = lib_name
    self.lib_version = lib_version
    self.enable_leader_aware_routing = enable_leader_aware_routing

    self.mocked_spanner_client = None
    self.mocked_instance_admin_client = None
    self.mocked_database_admin_client = None
    self._spanner_client = None
    self._instance_admin_client = None
    self._database_admin_client = None

  @property
  def insecure(self) -> bool:
    return self.credentials == INSECURE_CREDENTIALS

  @property
  def target(self) -> str:
    """The host with an explicit port, as gRPC expects it."""
    if ':' in self.host:
      return self.host
    return '{}:{}'.format(self.host, _DEFAULT_PORT)

  def channel(self) -> grpc.Channel:
    """Creates a new channel to the Spanner endpoint."""
    _logger.info('Opening %s channel to %s',
                 'insecure' if self.insecure else 'secure', self.target)
    if self.insecure:
      return grpc.insecure_channel(self.target, options=list(_CHANNEL_ARGS))

    credentials = self.credentials
    if credentials is not None and not isinstance(
        credentials, auth_credentials.Credentials):
      raise TypeError('credentials must be google.auth credentials, '
                      'INSECURE_CREDENTIALS or None')
    return spanner_transports.SpannerGrpcTransport.create_channel(
        self.target,
        credentials=credentials,
        quota_project_id=self.quota_project,
        options=list(_CHANNEL_ARGS))

  def _lib_token(self) -> Optional[str]:
    if self.lib_name in (None, _LIB_NAME):
      return None
    if self.lib_version:
      return '{}/{}'.format(self.lib_name, self.lib_version)
    return self.lib_name

  def lib_name_with_prefix(self) -> str:
    token = self._lib_token()
    if token is None:
      return _LIB_NAME
    return '{} {}'.format(token, _LIB_NAME)

  def client_info(self) -> client_info_lib.ClientInfo:
    # ClientInfo itself appends gccl/<version>.
    return client_info_lib.ClientInfo(
        client_library_version=version.__version__,
        user_agent=self._lib_token())

  def project_prefix(self) -> str:
    return 'projects/{}'.format(self.project)

  def call_options(self,
                   session_name: Optional[str] = None,
                   call_options: Optional[Mapping[str, Any]] = None,
                   route_to_leader: Optional[str] = None) -> Dict[str, Any]:
    """Keyword arguments for one generated RPC made over this connection."""
    return options.default_options(
        session_name,
        call_options,
        route_to_leader,
        default_prefix=self.project_prefix(),
        default_timeout=self.timeout,
        enable_leader_aware_routing=bool(self.enable_leader_aware_routing))

  @property
  def spanner_client(self) -> spanner_v1.SpannerClient:
    if self.mocked_spanner_client is not None:
      return self.mocked_spanner_client
    if self._spanner_client is None:
      self._spanner_client = spanner_v1.SpannerClient(
          transport=spanner_transports.SpannerGrpcTransport(
              **self._transport_args()))
    return self._spanner_client

  @property
  def instance_admin_client(
      self) -> spanner_admin_instance_v1.InstanceAdminClient:
    if self.mocked_instance_admin_client is not None:
      return self.mocked_instance_admin_client
    if self._instance_admin_client is None:
      self._instance_admin_client = spanner_admin_instance_v1.InstanceAdminClient(
          transport=instance_transports.InstanceAdminGrpcTransport(
              **self._transport_args()))
    return self._instance_admin_client

  @property
  def database_admin_client(
      self) -> spanner_admin_database_v1.DatabaseAdminClient:
    if self.mocked_database_admin_client is not None:
      return self.mocked_database_admin_client
    if self._database_admin_client is None:
      self._database_admin_client = spanner_admin_database_v1.DatabaseAdminClient(
          transport=database_transports.DatabaseAdminGrpcTransport(
              **self._transport_args()))
    return self._database_admin_client

  def _transport_args(self) -> Dict[str, Any]:
    return {
        'host': self.target,
        'channel': self.channel(),
        'client_info': self.client_info(),
    }

  def __repr__(self):
    return '{}({})'.format(type(self).__name__, self.project)
