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
import datetime
import logging
import os
import shutil
import tempfile
import unittest

from absl.testing import parameterized
from google.cloud import spanner_v1
from google.protobuf import descriptor_pb2
from google.protobuf import duration_pb2

from spanner_service import error
from spanner_service import options

_SESSION = 'projects/p/instances/i/databases/d/sessions/s'


class DefaultOptionsTest(parameterized.TestCase):

  def test_session_prefix(self):
    kwargs = options.default_options(session_name=_SESSION)
    self.assertEqual(
        {
            'metadata': [('google-cloud-resource-prefix',
                          'projects/p/instances/i/databases/d')]
        }, kwargs)

  def test_database_name_is_its_own_prefix(self):
    kwargs = options.default_options(
        session_name='projects/p/instances/i/databases/d')
    self.assertEqual([('google-cloud-resource-prefix',
                       'projects/p/instances/i/databases/d')],
                     kwargs['metadata'])

  def test_default_prefix(self):
    kwargs = options.default_options(default_prefix='projects/p')
    self.assertEqual([('google-cloud-resource-prefix', 'projects/p')],
                     kwargs['metadata'])

  def test_no_prefix(self):
    self.assertEqual({'metadata': []}, options.default_options())

  def test_route_to_leader_when_enabled(self):
    kwargs = options.default_options(
        _SESSION, route_to_leader='true', enable_leader_aware_routing=True)
    self.assertIn(('x-goog-spanner-route-to-leader', 'true'),
                  kwargs['metadata'])

  @parameterized.parameters((False, 'true'), (True, None))
  def test_route_to_leader_left_out(self, enabled, route_to_leader):
    kwargs = options.default_options(
        _SESSION,
        route_to_leader=route_to_leader,
        enable_leader_aware_routing=enabled)
    self.assertLen(kwargs['metadata'], 1)

  def test_call_options(self):
    retry = object()
    kwargs = options.default_options(
        call_options={
            'timeout': 30,
            'retry': retry
        }, default_timeout=10)
    self.assertEqual(30, kwargs['timeout'])
    self.assertIs(retry, kwargs['retry'])

  def test_default_timeout(self):
    kwargs = options.default_options(call_options={}, default_timeout=10)
    self.assertEqual(10, kwargs['timeout'])
    self.assertNotIn('retry', kwargs)

  def test_explicit_falsy_call_options_are_kept(self):
    kwargs = options.default_options(
        call_options={
            'timeout': 0,
            'retry': None
        }, default_timeout=10)
    self.assertEqual(0, kwargs['timeout'])
    self.assertIn('retry', kwargs)
    self.assertIsNone(kwargs['retry'])

  def test_no_timeout(self):
    self.assertNotIn('timeout', options.default_options())


class RequestShapeTest(parameterized.TestCase):

  def test_compact(self):
    self.assertEqual({
        'a': 0,
        'b': False,
        'c': []
    }, options.compact({
        'a': 0,
        'b': False,
        'c': [],
        'd': None
    }))

  def test_partition_options_absent(self):
    self.assertIsNone(options.partition_options(None, None))

  def test_partition_options_zero_is_given(self):
    partition_options = options.partition_options(0, None)
    self.assertIsInstance(partition_options, spanner_v1.PartitionOptions)
    self.assertEqual(0, partition_options.partition_size_bytes)

  @parameterized.parameters(
      (100, None, spanner_v1.PartitionOptions(partition_size_bytes=100)),
      (None, 4, spanner_v1.PartitionOptions(max_partitions=4)),
      (100, 4,
       spanner_v1.PartitionOptions(partition_size_bytes=100, max_partitions=4)),
  )
  def test_partition_options(self, size, max_partitions, expected):
    self.assertEqual(expected, options.partition_options(size, max_partitions))

  @parameterized.parameters(True, False)
  def test_read_write_transaction_options(self, exclude):
    transaction_options = options.read_write_transaction_options(exclude)
    self.assertIn('read_write', transaction_options)
    self.assertEqual(exclude,
                     transaction_options.exclude_txn_from_change_streams)

  def test_partitioned_dml_transaction_options(self):
    transaction_options = options.partitioned_dml_transaction_options(True)
    self.assertIn('partitioned_dml', transaction_options)
    self.assertTrue(transaction_options.exclude_txn_from_change_streams)

  def test_read_only_strong(self):
    read_only = options.read_only_transaction_options(strong=True).read_only
    self.assertTrue(read_only.strong)
    self.assertTrue(read_only.return_read_timestamp)

  def test_read_only_timestamp(self):
    time = datetime.datetime(2024, 5, 6, tzinfo=datetime.timezone.utc)
    read_only = options.read_only_transaction_options(timestamp=time).read_only
    self.assertEqual(time, read_only.read_timestamp)
    self.assertNotIn('strong', read_only)
    self.assertTrue(read_only.return_read_timestamp)

  def test_read_only_staleness(self):
    read_only = options.read_only_transaction_options(staleness=1.5).read_only
    self.assertEqual(datetime.timedelta(seconds=1.5), read_only.exact_staleness)
    self.assertNotIn('read_timestamp', read_only)

  def test_read_only_without_bound(self):
    read_only = options.read_only_transaction_options().read_only
    self.assertNotIn('strong', read_only)
    self.assertNotIn('read_timestamp', read_only)
    self.assertNotIn('exact_staleness', read_only)
    self.assertTrue(read_only.return_read_timestamp)

  def test_add_commit_options(self):
    request = options.add_commit_options({'session': _SESSION}, {
        'return_commit_stats': True,
        'max_commit_delay': 100
    })
    self.assertEqual(
        {
            'session': _SESSION,
            'return_commit_stats': True,
            'max_commit_delay': duration_pb2.Duration(nanos=100000000),
        }, request)

  @parameterized.parameters((None,), ({},))
  def test_add_commit_options_absent(self, commit_options):
    self.assertEqual({'session': _SESSION},
                     options.add_commit_options({'session': _SESSION},
                                                commit_options))

  def test_add_commit_options_only_given_keys(self):
    request = options.add_commit_options({}, {'return_commit_stats': False})
    self.assertEqual({'return_commit_stats': False}, request)


class DescriptorSetTest(parameterized.TestCase):

  def _descriptor_set(self):
    return descriptor_pb2.FileDescriptorSet(
        file=[descriptor_pb2.FileDescriptorProto(name='music.proto')])

  def test_none(self):
    self.assertIsNone(options.descriptor_set_bytes(None))

  def test_descriptor_set(self):
    descriptor_set = self._descriptor_set()
    self.assertEqual(descriptor_set.SerializeToString(),
                     options.descriptor_set_bytes(descriptor_set))

  def test_bytes(self):
    self.assertEqual(b'serialized', options.descriptor_set_bytes(b'serialized'))

  def test_path(self):
    content = self._descriptor_set().SerializeToString()
    test_dir = tempfile.mkdtemp()
    self.addCleanup(shutil.rmtree, test_dir)
    path = os.path.join(test_dir, 'music.pb')
    with open(path, 'wb') as descriptor_file:
      descriptor_file.write(content)
    self.assertEqual(content, options.descriptor_set_bytes(path))

  @parameterized.parameters((42,), (4.2,), ([b'music.proto'],))
  def test_unsupported(self, descriptor_set):
    with self.assertRaises(error.UnsupportedDescriptorSetError):
      options.descriptor_set_bytes(descriptor_set)

  def test_unsupported_is_type_error(self):
    with self.assertRaisesRegex(TypeError, 'int is not supported'):
      options.descriptor_set_bytes(42)


if __name__ == '__main__':
  logging.basicConfig()
  unittest.main()
