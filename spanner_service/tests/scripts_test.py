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
import io
import logging
import unittest
from unittest import mock

from absl.testing import parameterized

from spanner_service import connection
from spanner_service.admin import scripts


def _named(*names):
  items = []
  for name in names:
    item = mock.Mock()
    item.name = name
    items.append(item)
  return items


class ScriptsTest(parameterized.TestCase):

  def setUp(self):
    super().setUp()
    patcher = mock.patch('spanner_service.service.connect')
    self.connect = patcher.start()
    self.addCleanup(patcher.stop)
    self.service = self.connect.return_value

  def run_main(self, *argv):
    with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
      scripts.main(argv=list(argv))
    return stdout.getvalue()

  def test_instances(self):
    self.service.list_instances.return_value.instances = _named(
        'projects/p/instances/a', 'projects/p/instances/b')
    output = self.run_main('--project', 'p', 'instances', '--page-size', '2')
    self.assertEqual('projects/p/instances/a\nprojects/p/instances/b\n', output)
    self.connect.assert_called_once_with('p', credentials=None, host=None)
    self.service.list_instances.assert_called_once_with(max=2)

  def test_emulator(self):
    self.service.list_instance_configs.return_value.instance_configs = _named(
        'projects/p/instanceConfigs/emulator-config')
    output = self.run_main('--project', 'p', '--emulator', '--host',
                           'localhost:9010', 'instance-configs')
    self.assertEqual('projects/p/instanceConfigs/emulator-config\n', output)
    self.connect.assert_called_once_with(
        'p',
        credentials=connection.INSECURE_CREDENTIALS,
        host='localhost:9010')

  def test_databases(self):
    self.service.list_databases.return_value.databases = _named(
        'projects/p/instances/i/databases/d')
    output = self.run_main('--project', 'p', 'databases', 'i')
    self.assertEqual('projects/p/instances/i/databases/d\n', output)
    self.service.list_databases.assert_called_once_with('i', max=None)

  def test_ddl(self):
    self.service.get_database_ddl.return_value.statements = [
        'CREATE TABLE T (K INT64) PRIMARY KEY (K)'
    ]
    output = self.run_main('--project', 'p', 'ddl', 'i', 'd')
    self.assertEqual('CREATE TABLE T (K INT64) PRIMARY KEY (K)\n', output)
    self.service.get_database_ddl.assert_called_once_with('i', 'd')

  def test_backups(self):
    self.service.list_backups.return_value = _named(
        'projects/p/instances/i/backups/b')
    output = self.run_main('--project', 'p', 'backups', 'i', '--filter',
                           'state:READY')
    self.assertEqual('projects/p/instances/i/backups/b\n', output)
    self.service.list_backups.assert_called_once_with(
        'i', filter='state:READY', page_size=None)

  def test_no_subcommand_prints_help(self):
    output = self.run_main('--project', 'p')
    self.assertIn('subcommands', output)
    self.connect.assert_not_called()


if __name__ == '__main__':
  logging.basicConfig()
  unittest.main()
