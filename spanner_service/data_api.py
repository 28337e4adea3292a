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
"""Data-plane Spanner RPCs: sessions, queries, reads and transactions."""

import datetime
import logging
from typing import Any, Iterable, Mapping, Optional

from google.cloud import spanner_v1
from spanner_service import api
from spanner_service import convert
from spanner_service import options
from spanner_service import routing

_logger = logging.getLogger(__name__)


def _session_template(labels: Optional[Mapping[Any, Any]],
                      database_role: Optional[str]
                     ) -> Optional[spanner_v1.Session]:
  if not labels and not database_role:
    return None
  return spanner_v1.Session(
      options.compact({
          'labels': convert.labels_to_strings(labels),
          'creator_role': database_role,
      }))


def _statement_to_pb(statement: Any) -> Any:
  if isinstance(statement, str):
    return spanner_v1.ExecuteBatchDmlRequest.Statement(sql=statement)
  if hasattr(statement, 'to_pb'):
    return statement.to_pb()
  return statement


class SpannerDataApi(api.SpannerServiceApi):
  """Sends requests to the Spanner data API."""

  @property
  def _service(self) -> spanner_v1.SpannerClient:
    return self._connection.spanner_client

  def get_session(self, session_name: str,
                  call_options: api.CallOptions = None):
    kwargs = self._options(session_name, call_options,
                           routing.route_to_leader('get_session'))
    _logger.debug('GetSession name=%s', session_name)
    return self._service.get_session(request={'name': session_name}, **kwargs)

  def create_session(self,
                     database_name: str,
                     labels: Optional[Mapping[Any, Any]] = None,
                     call_options: api.CallOptions = None,
                     database_role: Optional[str] = None):
    """Creates one session on a database.

    Args:
      database_name: Full name of the database
      labels: Optional labels for the session
      call_options: Optional mapping with `timeout` and/or `retry`
      database_role: Optional database role the session acts as

    Returns:
      The new Session.
    """
    kwargs = self._options(database_name, call_options,
                           routing.route_to_leader('create_session'))
    request = options.compact({
        'database': database_name,
        'session': _session_template(labels, database_role),
    })
    _logger.debug('CreateSession database=%s', database_name)
    return self._service.create_session(request=request, **kwargs)

  def batch_create_sessions(self,
                            database_name: str,
                            session_count: int,
                            labels: Optional[Mapping[Any, Any]] = None,
                            call_options: api.CallOptions = None,
                            database_role: Optional[str] = None):
    """Creates up to `session_count` sessions on a database.

    The response may hold fewer sessions than requested.
    """
    kwargs = self._options(database_name, call_options,
                           routing.route_to_leader('batch_create_sessions'))
    request = options.compact({
        'database': database_name,
        'session_count': session_count,
        'session_template': _session_template(labels, database_role),
    })
    _logger.debug('BatchCreateSessions database=%s count=%d', database_name,
                  session_count)
    return self._service.batch_create_sessions(request=request, **kwargs)

  def delete_session(self, session_name: str,
                     call_options: api.CallOptions = None):
    kwargs = self._options(session_name, call_options,
                           routing.route_to_leader('delete_session'))
    _logger.debug('DeleteSession name=%s', session_name)
    return self._service.delete_session(
        request={'name': session_name}, **kwargs)

  def execute_streaming_sql(self,
                            session_name: str,
                            sql: str,
                            transaction: Any = None,
                            params: Any = None,
                            types: Optional[Mapping[str, Any]] = None,
                            resume_token: Optional[bytes] = None,
                            partition_token: Optional[bytes] = None,
                            seqno: Optional[int] = None,
                            query_options: Any = None,
                            request_options: Any = None,
                            call_options: api.CallOptions = None,
                            data_boost_enabled: Optional[bool] = None,
                            directed_read_options: Any = None,
                            route_to_leader: Optional[str] = None):
    """Executes a SQL statement, streaming back partial result sets.

    Args:
      session_name: Session to execute the statement in
      sql: The SQL statement
      transaction: TransactionSelector to run the statement in
      params: Struct of parameter values
      types: Mapping from parameter name to its Spanner Type
      resume_token: Token to resume an interrupted stream from
      partition_token: Token of the partition to execute
      seqno: Sequence number of a DML statement in its transaction
      query_options: QueryOptions for the statement
      request_options: RequestOptions for the statement
      call_options: Optional mapping with `timeout` and/or `retry`
      data_boost_enabled: Whether a partitioned query uses Data Boost
      directed_read_options: DirectedReadOptions for a read-only statement
      route_to_leader: Leader-aware routing header value, or None to leave it
        out. See routing.execute_query().

    Returns:
      An iterable of PartialResultSet.
    """
    kwargs = self._options(session_name, call_options, route_to_leader)
    request = options.compact({
        'session': session_name,
        'sql': sql,
        'transaction': transaction,
        'params': params,
        'param_types': types,
        'resume_token': resume_token,
        'partition_token': partition_token,
        'seqno': seqno,
        'query_options': query_options,
        'request_options': request_options,
        'directed_read_options': directed_read_options,
        'data_boost_enabled': data_boost_enabled,
    })
    _logger.debug('ExecuteStreamingSql session=%s sql=%s', session_name, sql)
    return self._service.execute_streaming_sql(request=request, **kwargs)

  def execute_batch_dml(self,
                        session_name: str,
                        transaction: Any,
                        statements: Iterable[Any],
                        seqno: int,
                        request_options: Any = None,
                        call_options: api.CallOptions = None):
    """Executes a batch of DML statements in one transaction.

    Statements may be SQL strings, objects with a `to_pb()` method or
    ExecuteBatchDmlRequest.Statement values.
    """
    kwargs = self._options(session_name, call_options,
                           routing.route_to_leader('execute_batch_dml'))
    request = options.compact({
        'session': session_name,
        'transaction': transaction,
        'statements': [_statement_to_pb(statement) for statement in statements],
        'seqno': seqno,
        'request_options': request_options,
    })
    _logger.debug('ExecuteBatchDml session=%s statements=%d', session_name,
                  len(request['statements']))
    return self._service.execute_batch_dml(request=request, **kwargs)

  def streaming_read_table(self,
                           session_name: str,
                           table_name: str,
                           columns: Iterable[str],
                           keys: Any = None,
                           index: Optional[str] = None,
                           transaction: Any = None,
                           limit: Optional[int] = None,
                           resume_token: Optional[bytes] = None,
                           partition_token: Optional[bytes] = None,
                           request_options: Any = None,
                           call_options: api.CallOptions = None,
                           data_boost_enabled: Optional[bool] = None,
                           directed_read_options: Any = None,
                           route_to_leader: Optional[str] = None):
    """Reads rows from a table, streaming back partial result sets.

    Args:
      session_name: Session to read in
      table_name: Table to read from
      columns: Columns to read
      keys: KeySet of the rows to read
      index: Optional index to read through
      transaction: TransactionSelector to read in
      limit: Maximum number of rows
      resume_token: Token to resume an interrupted stream from
      partition_token: Token of the partition to read
      request_options: RequestOptions for the read
      call_options: Optional mapping with `timeout` and/or `retry`
      data_boost_enabled: Whether a partitioned read uses Data Boost
      directed_read_options: DirectedReadOptions for the read
      route_to_leader: Leader-aware routing header value, or None to leave it
        out. See routing.read().

    Returns:
      An iterable of PartialResultSet.
    """
    kwargs = self._options(session_name, call_options, route_to_leader)
    request = options.compact({
        'session': session_name,
        'table': table_name,
        'columns': list(columns),
        'key_set': keys,
        'transaction': transaction,
        'index': index,
        'limit': limit,
        'resume_token': resume_token,
        'partition_token': partition_token,
        'request_options': request_options,
        'data_boost_enabled': data_boost_enabled,
        'directed_read_options': directed_read_options,
    })
    _logger.debug('StreamingRead session=%s table=%s columns=%s', session_name,
                  table_name, request['columns'])
    return self._service.streaming_read(request=request, **kwargs)

  def partition_read(self,
                     session_name: str,
                     table_name: str,
                     columns: Iterable[str],
                     transaction: Any,
                     keys: Any = None,
                     index: Optional[str] = None,
                     partition_size_bytes: Optional[int] = None,
                     max_partitions: Optional[int] = None,
                     call_options: api.CallOptions = None):
    kwargs = self._options(session_name, call_options,
                           routing.route_to_leader('partition_read'))
    request = options.compact({
        'session': session_name,
        'table': table_name,
        'key_set': keys,
        'transaction': transaction,
        'index': index,
        'columns': list(columns),
        'partition_options': options.partition_options(
            partition_size_bytes, max_partitions),
    })
    _logger.debug('PartitionRead session=%s table=%s', session_name,
                  table_name)
    return self._service.partition_read(request=request, **kwargs)

  def partition_query(self,
                      session_name: str,
                      sql: str,
                      transaction: Any,
                      params: Any = None,
                      types: Optional[Mapping[str, Any]] = None,
                      partition_size_bytes: Optional[int] = None,
                      max_partitions: Optional[int] = None,
                      call_options: api.CallOptions = None):
    kwargs = self._options(session_name, call_options,
                           routing.route_to_leader('partition_query'))
    request = options.compact({
        'session': session_name,
        'sql': sql,
        'transaction': transaction,
        'params': params,
        'param_types': types,
        'partition_options': options.partition_options(
            partition_size_bytes, max_partitions),
    })
    _logger.debug('PartitionQuery session=%s sql=%s', session_name, sql)
    return self._service.partition_query(request=request, **kwargs)

  def commit(self,
             session_name: str,
             mutations: Iterable[Any] = (),
             transaction_id: Optional[bytes] = None,
             exclude_txn_from_change_streams: bool = False,
             commit_options: Optional[Mapping[str, Any]] = None,
             request_options: Any = None,
             call_options: api.CallOptions = None):
    """Commits a transaction.

    Without a `transaction_id` the mutations are applied in a single-use
    read-write transaction.

    Args:
      session_name: Session the transaction belongs to
      mutations: Mutations to apply
      transaction_id: ID of a transaction started with begin_transaction
      exclude_txn_from_change_streams: Whether change streams skip the
        single-use transaction
      commit_options: Optional mapping with `return_commit_stats` and/or
        `max_commit_delay` (milliseconds)
      request_options: RequestOptions for the commit
      call_options: Optional mapping with `timeout` and/or `retry`

    Returns:
      The CommitResponse.
    """
    single_use_transaction = None
    if transaction_id is None:
      single_use_transaction = options.read_write_transaction_options(
          exclude_txn_from_change_streams)
    kwargs = self._options(session_name, call_options,
                           routing.route_to_leader('commit'))
    request = options.compact({
        'session': session_name,
        'transaction_id': transaction_id,
        'single_use_transaction': single_use_transaction,
        'mutations': list(mutations or ()),
        'request_options': request_options,
    })
    request = options.add_commit_options(request, commit_options)
    _logger.debug('Commit session=%s mutations=%d', session_name,
                  len(request['mutations']))
    return self._service.commit(request=request, **kwargs)

  def rollback(self,
               session_name: str,
               transaction_id: bytes,
               call_options: api.CallOptions = None):
    kwargs = self._options(session_name, call_options,
                           routing.route_to_leader('rollback'))
    request = {'session': session_name, 'transaction_id': transaction_id}
    _logger.debug('Rollback session=%s', session_name)
    return self._service.rollback(request=request, **kwargs)

  def begin_transaction(self,
                        session_name: str,
                        exclude_txn_from_change_streams: bool = False,
                        request_options: Any = None,
                        call_options: api.CallOptions = None,
                        route_to_leader: Optional[str] = None):
    """Begins a read-write transaction."""
    kwargs = self._options(session_name, call_options, route_to_leader)
    request = options.compact({
        'session': session_name,
        'options': options.read_write_transaction_options(
            exclude_txn_from_change_streams),
        'request_options': request_options,
    })
    _logger.debug('BeginTransaction session=%s', session_name)
    return self._service.begin_transaction(request=request, **kwargs)

  def batch_write(self,
                  session_name: str,
                  mutation_groups: Iterable[Any],
                  exclude_txn_from_change_streams: bool = False,
                  request_options: Any = None,
                  call_options: api.CallOptions = None):
    """Applies groups of mutations, streaming back one response per batch."""
    kwargs = self._options(session_name, call_options,
                           routing.route_to_leader('batch_write'))
    request = options.compact({
        'session': session_name,
        'request_options': request_options,
        'mutation_groups': list(mutation_groups),
        'exclude_txn_from_change_streams': exclude_txn_from_change_streams,
    })
    _logger.debug('BatchWrite session=%s groups=%d', session_name,
                  len(request['mutation_groups']))
    return self._service.batch_write(request=request, **kwargs)

  def create_snapshot(self,
                      session_name: str,
                      strong: Optional[bool] = None,
                      timestamp: Optional[datetime.datetime] = None,
                      staleness: Optional[convert.Number] = None,
                      call_options: api.CallOptions = None):
    """Begins a read-only transaction.

    Args:
      session_name: Session to begin the transaction in
      strong: Whether to read the latest data
      timestamp: Read the data as of this time
      staleness: Read the data as of this many seconds ago
      call_options: Optional mapping with `timeout` and/or `retry`

    Returns:
      The Transaction, including its read timestamp.
    """
    kwargs = self._options(session_name, call_options)
    request = {
        'session': session_name,
        'options': options.read_only_transaction_options(
            strong=strong, timestamp=timestamp, staleness=staleness),
    }
    _logger.debug('BeginTransaction (read-only) session=%s', session_name)
    return self._service.begin_transaction(request=request, **kwargs)

  def create_pdml(self,
                  session_name: str,
                  exclude_txn_from_change_streams: bool = False,
                  call_options: api.CallOptions = None):
    """Begins a partitioned DML transaction."""
    kwargs = self._options(session_name, call_options,
                           routing.begin_transaction(True))
    request = {
        'session': session_name,
        'options': options.partitioned_dml_transaction_options(
            exclude_txn_from_change_streams),
    }
    _logger.debug('BeginTransaction (partitioned DML) session=%s',
                  session_name)
    return self._service.begin_transaction(request=request, **kwargs)
