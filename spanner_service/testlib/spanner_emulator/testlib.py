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
"""Superclass for tests that use the spanner emulator."""

import os
import unittest
import uuid

from spanner_service import service as service_lib
from spanner_service.testlib.spanner_emulator import emulator

_INSTANCE_ID = 'spanner-instance-name'


def _database_id() -> str:
  """Returns a new database ID that's unlikely to conflict with any other."""
  random_string = str(uuid.uuid4()).split('-')[0]
  return 'spanner-db-' + random_string


def _get_instance(spanner_service: service_lib.Service) -> str:
  """Returns the name of a spanner instance on the emulator.

  Re-uses an existing instance if there is one. Otherwise creates a new
  instance and waits for it to be created.

  Args:
    spanner_service: A Service connected to the emulator.
  """
  existing = spanner_service.list_instances().instances
  if existing:
    return existing[0].name

  # The emulator has one default config.
  config = spanner_service.list_instance_configs().instance_configs[0]
  operation = spanner_service.create_instance(
      _INSTANCE_ID, name=_INSTANCE_ID, config=config.name, nodes=1)
  return operation.result().name


@unittest.skipUnless(
    os.environ.get(emulator.EMULATOR_BINARY_PATH_ENV_VAR),
    'Set {} to run tests against the Spanner emulator'.format(
        emulator.EMULATOR_BINARY_PATH_ENV_VAR))
class TestCase(unittest.TestCase):
  """Sets up a spanner emulator database for each test case.

  Attributes:
    spanner_service: Service connected to the emulator.
    instance_id: ID of the emulator instance holding the database.
    database_id: ID of an empty database created for the test.
    database_name: Full name of that database.
  """

  _spanner_emulator: emulator.Emulator

  @classmethod
  def setUpClass(cls):
    super().setUpClass()
    cls._spanner_emulator = emulator.Emulator()

  def setUp(self):
    super().setUp()
    self.spanner_service = self._spanner_emulator.get_service()
    self.instance_id = _get_instance(self.spanner_service).split('/')[-1]
    self.database_id = _database_id()
    self.spanner_service.create_database(self.instance_id,
                                         self.database_id).result()
    self.database_name = self.spanner_service.database_path(
        self.instance_id, self.database_id)

  @classmethod
  def tearDownClass(cls):
    cls._spanner_emulator.stop()
    super().tearDownClass()
