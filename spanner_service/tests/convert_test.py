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
import decimal
import logging
import unittest

from absl.testing import parameterized
from google.protobuf import duration_pb2

from spanner_service import convert


class ConvertTest(parameterized.TestCase):

  @parameterized.parameters(
      (2, False, duration_pb2.Duration(seconds=2)),
      (1.5, False, duration_pb2.Duration(seconds=1, nanos=500000000)),
      (decimal.Decimal('0.25'), False, duration_pb2.Duration(nanos=250000000)),
      (1500, True, duration_pb2.Duration(seconds=1, nanos=500000000)),
      (100, True, duration_pb2.Duration(nanos=100000000)),
  )
  def test_number_to_duration(self, number, millisecond, expected):
    self.assertEqual(expected,
                     convert.number_to_duration(number, millisecond=millisecond))

  def test_number_to_duration_none(self):
    self.assertIsNone(convert.number_to_duration(None))
    self.assertIsNone(convert.number_to_duration(None, millisecond=True))

  def test_time_to_timestamp(self):
    time = datetime.datetime(
        2024, 1, 2, 3, 4, 5, 600000, tzinfo=datetime.timezone.utc)
    timestamp = convert.time_to_timestamp(time)
    self.assertEqual(1704164645, timestamp.seconds)
    self.assertEqual(600000000, timestamp.nanos)

  def test_time_to_timestamp_naive_is_utc(self):
    naive = datetime.datetime(2024, 1, 2, 3, 4, 5)
    aware = naive.replace(tzinfo=datetime.timezone.utc)
    self.assertEqual(
        convert.time_to_timestamp(aware), convert.time_to_timestamp(naive))

  def test_time_to_timestamp_other_zone(self):
    zone = datetime.timezone(datetime.timedelta(hours=2))
    time = datetime.datetime(2024, 1, 2, 5, 4, 5, tzinfo=zone)
    self.assertEqual(1704164645, convert.time_to_timestamp(time).seconds)

  def test_time_to_timestamp_none(self):
    self.assertIsNone(convert.time_to_timestamp(None))

  def test_labels_to_strings(self):
    self.assertEqual({
        'env': 'prod',
        '1': 'True'
    }, convert.labels_to_strings({
        'env': 'prod',
        1: True
    }))
    self.assertIsNone(convert.labels_to_strings(None))


if __name__ == '__main__':
  logging.basicConfig()
  unittest.main()
