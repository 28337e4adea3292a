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
import logging
import unittest

from google.cloud import spanner_v1

from spanner_service.testlib.spanner_emulator import testlib


class ServiceEmulatorTest(testlib.TestCase):

  def setUp(self):
    super().setUp()
    self.spanner_service.update_database_ddl(
        self.instance_id,
        self.database_id,
        statements=[
            'CREATE TABLE Singers (SingerId INT64 NOT NULL, '
            'Name STRING(MAX)) PRIMARY KEY (SingerId)'
        ]).result()

  def test_database_is_listed(self):
    response = self.spanner_service.list_databases(self.instance_id)
    self.assertIn(self.database_name,
                  [database.name for database in response.databases])

  def test_get_database_ddl(self):
    response = self.spanner_service.get_database_ddl(self.instance_id,
                                                     self.database_id)
    self.assertLen(response.statements, 1)
    self.assertIn('CREATE TABLE Singers', response.statements[0])

  def test_commit_and_read(self):
    session = self.spanner_service.create_session(self.database_name)
    self.addCleanup(self.spanner_service.delete_session, session.name)

    mutation = spanner_v1.Mutation(
        insert=spanner_v1.Mutation.Write(
            table='Singers',
            columns=['SingerId', 'Name'],
            values=[['1', 'Marc']]))
    response = self.spanner_service.commit(session.name, [mutation])
    self.assertIsNotNone(response.commit_timestamp)

    snapshot = self.spanner_service.create_snapshot(session.name, strong=True)
    self.assertIsNotNone(snapshot.read_timestamp)
    partials = list(
        self.spanner_service.execute_streaming_sql(
            session.name,
            'SELECT Name FROM Singers',
            transaction=spanner_v1.TransactionSelector(id=snapshot.id)))
    values = [value for partial in partials for value in partial.values]
    self.assertEqual(['Marc'], values)

  def test_begin_and_rollback(self):
    session = self.spanner_service.create_session(self.database_name)
    self.addCleanup(self.spanner_service.delete_session, session.name)
    transaction = self.spanner_service.begin_transaction(session.name)
    self.spanner_service.rollback(session.name, transaction.id)


if __name__ == '__main__':
  logging.basicConfig()
  unittest.main()
