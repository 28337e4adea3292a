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
"""Database Admin RPCs: databases, schemas, backups and their operations."""

import datetime
import logging
from typing import Any, Iterable, Optional

from google.cloud import spanner_admin_database_v1
from spanner_service import api
from spanner_service import options

_logger = logging.getLogger(__name__)


class DatabaseAdminApi(api.SpannerServiceApi):
  """Sends requests to the Spanner Database Admin API."""

  @property
  def _databases(self) -> spanner_admin_database_v1.DatabaseAdminClient:
    return self._connection.database_admin_client

  def list_databases(self,
                     instance_id: str,
                     token: Optional[str] = None,
                     max: Optional[int] = None,  # pylint: disable=redefined-builtin
                     call_options: api.CallOptions = None):
    """Returns one page of databases in an instance as the raw response."""
    request = options.compact({
        'parent': self.instance_path(instance_id),
        'page_size': max,
        'page_token': token,
    })
    _logger.debug('ListDatabases parent=%s', request['parent'])
    pager = self._databases.list_databases(
        request=request, **self._options(call_options=call_options))
    return api.first_page(pager)

  def get_database(self,
                   instance_id: str,
                   database_id: str,
                   call_options: api.CallOptions = None):
    request = {'name': self.database_path(instance_id, database_id)}
    _logger.debug('GetDatabase name=%s', request['name'])
    return self._databases.get_database(
        request=request, **self._options(call_options=call_options))

  def create_database(self,
                      instance_id: str,
                      database_id: str,
                      statements: Iterable[str] = (),
                      call_options: api.CallOptions = None,
                      encryption_config: Any = None):
    """Starts creating a database.

    Args:
      instance_id: Instance that will hold the database
      database_id: ID of the new database
      statements: DDL statements run after the database is created
      call_options: Optional mapping with `timeout` and/or `retry`
      encryption_config: Optional EncryptionConfig for the database

    Returns:
      The long-running operation creating the database.
    """
    request = options.compact({
        'parent': self.instance_path(instance_id),
        'create_statement': 'CREATE DATABASE `{}`'.format(database_id),
        'extra_statements': list(statements or ()),
        'encryption_config': encryption_config,
    })
    _logger.debug('CreateDatabase parent=%s database_id=%s',
                  request['parent'], database_id)
    return self._databases.create_database(
        request=request, **self._options(call_options=call_options))

  def drop_database(self,
                    instance_id: str,
                    database_id: str,
                    call_options: api.CallOptions = None):
    request = {'database': self.database_path(instance_id, database_id)}
    _logger.debug('DropDatabase database=%s', request['database'])
    return self._databases.drop_database(
        request=request, **self._options(call_options=call_options))

  def get_database_ddl(self,
                       instance_id: str,
                       database_id: str,
                       call_options: api.CallOptions = None):
    request = {'database': self.database_path(instance_id, database_id)}
    return self._databases.get_database_ddl(
        request=request, **self._options(call_options=call_options))

  def update_database_ddl(self,
                          instance_id: str,
                          database_id: str,
                          statements: Iterable[str] = (),
                          operation_id: Optional[str] = None,
                          call_options: api.CallOptions = None,
                          descriptor_set: options.DescriptorSet = None):
    """Starts applying DDL statements to a database.

    Args:
      instance_id: Instance holding the database
      database_id: Database to update
      statements: DDL statements to apply
      operation_id: Optional ID for the long-running operation
      call_options: Optional mapping with `timeout` and/or `retry`
      descriptor_set: Proto descriptors for proto columns, as accepted by
        options.descriptor_set_bytes()

    Returns:
      The long-running operation applying the statements.

    Raises:
      UnsupportedDescriptorSetError: if `descriptor_set` has an unsupported
        type.
    """
    proto_descriptors = options.descriptor_set_bytes(descriptor_set)
    request = options.compact({
        'database': self.database_path(instance_id, database_id),
        'statements': list(statements or ()),
        'operation_id': operation_id,
        'proto_descriptors': proto_descriptors,
    })
    _logger.debug('UpdateDatabaseDdl database=%s statements=%s',
                  request['database'], request['statements'])
    return self._databases.update_database_ddl(
        request=request, **self._options(call_options=call_options))

  def get_database_policy(self,
                          instance_id: str,
                          database_id: str,
                          call_options: api.CallOptions = None):
    request = {'resource': self.database_path(instance_id, database_id)}
    return self._databases.get_iam_policy(
        request=request, **self._options(call_options=call_options))

  def set_database_policy(self,
                          instance_id: str,
                          database_id: str,
                          new_policy: Any,
                          call_options: api.CallOptions = None):
    request = {
        'resource': self.database_path(instance_id, database_id),
        'policy': new_policy,
    }
    return self._databases.set_iam_policy(
        request=request, **self._options(call_options=call_options))

  def test_database_permissions(self,
                                instance_id: str,
                                database_id: str,
                                permissions: Iterable[str],
                                call_options: api.CallOptions = None):
    request = {
        'resource': self.database_path(instance_id, database_id),
        'permissions': list(permissions),
    }
    return self._databases.test_iam_permissions(
        request=request, **self._options(call_options=call_options))

  def create_backup(self,
                    instance_id: str,
                    database_id: str,
                    backup_id: str,
                    expire_time: datetime.datetime,
                    version_time: Optional[datetime.datetime],
                    call_options: api.CallOptions = None,
                    encryption_config: Any = None):
    """Starts creating a backup of a database.

    Args:
      instance_id: Instance holding the database and the new backup
      database_id: Database to back up
      backup_id: ID of the new backup
      expire_time: When the backup expires
      version_time: Point in time the backup captures, or None for the time
        the backup is created
      call_options: Optional mapping with `timeout` and/or `retry`
      encryption_config: Optional CreateBackupEncryptionConfig

    Returns:
      The long-running operation creating the backup.
    """
    backup = options.compact({
        'database': self.database_path(instance_id, database_id),
        'expire_time': expire_time,
        'version_time': version_time,
    })
    request = options.compact({
        'parent': self.instance_path(instance_id),
        'backup_id': backup_id,
        'backup': backup,
        'encryption_config': encryption_config,
    })
    _logger.debug('CreateBackup parent=%s backup_id=%s', request['parent'],
                  backup_id)
    return self._databases.create_backup(
        request=request, **self._options(call_options=call_options))

  def get_backup(self,
                 instance_id: str,
                 backup_id: str,
                 call_options: api.CallOptions = None):
    request = {'name': self.backup_path(instance_id, backup_id)}
    return self._databases.get_backup(
        request=request, **self._options(call_options=call_options))

  def update_backup(self,
                    backup: Any,
                    update_mask: Any,
                    call_options: api.CallOptions = None):
    request = {'backup': backup, 'update_mask': update_mask}
    return self._databases.update_backup(
        request=request, **self._options(call_options=call_options))

  def delete_backup(self,
                    instance_id: str,
                    backup_id: str,
                    call_options: api.CallOptions = None):
    request = {'name': self.backup_path(instance_id, backup_id)}
    _logger.debug('DeleteBackup name=%s', request['name'])
    return self._databases.delete_backup(
        request=request, **self._options(call_options=call_options))

  def list_backups(self,
                   instance_id: str,
                   filter: Optional[str] = None,  # pylint: disable=redefined-builtin
                   page_size: Optional[int] = None,
                   page_token: Optional[str] = None,
                   call_options: api.CallOptions = None):
    """Lists backups in an instance, returning the generated pager."""
    request = options.compact({
        'parent': self.instance_path(instance_id),
        'filter': filter,
        'page_size': page_size,
        'page_token': page_token,
    })
    return self._databases.list_backups(
        request=request, **self._options(call_options=call_options))

  def list_database_operations(self,
                               instance_id: str,
                               filter: Optional[str] = None,  # pylint: disable=redefined-builtin
                               page_size: Optional[int] = None,
                               page_token: Optional[str] = None,
                               call_options: api.CallOptions = None):
    request = options.compact({
        'parent': self.instance_path(instance_id),
        'filter': filter,
        'page_size': page_size,
        'page_token': page_token,
    })
    return self._databases.list_database_operations(
        request=request, **self._options(call_options=call_options))

  def list_backup_operations(self,
                             instance_id: str,
                             filter: Optional[str] = None,  # pylint: disable=redefined-builtin
                             page_size: Optional[int] = None,
                             page_token: Optional[str] = None,
                             call_options: api.CallOptions = None):
    request = options.compact({
        'parent': self.instance_path(instance_id),
        'filter': filter,
        'page_size': page_size,
        'page_token': page_token,
    })
    return self._databases.list_backup_operations(
        request=request, **self._options(call_options=call_options))

  def restore_database(self,
                       backup_instance_id: str,
                       backup_id: str,
                       database_instance_id: str,
                       database_id: str,
                       call_options: api.CallOptions = None,
                       encryption_config: Any = None):
    """Starts restoring a backup into a new database.

    The backup and the new database may live in different instances.
    """
    request = options.compact({
        'parent': self.instance_path(database_instance_id),
        'database_id': database_id,
        'backup': self.backup_path(backup_instance_id, backup_id),
        'encryption_config': encryption_config,
    })
    _logger.debug('RestoreDatabase parent=%s database_id=%s backup=%s',
                  request['parent'], database_id, request['backup'])
    return self._databases.restore_database(
        request=request, **self._options(call_options=call_options))
