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
"""Python test wrapper for the cloud spanner emulator binary."""

import os
import subprocess
from typing import Optional

import portpicker

from spanner_service import connection
from spanner_service import service

# Environment variable with path to Spanner Emulator binary.
EMULATOR_BINARY_PATH_ENV_VAR = 'SPANNER_EMULATOR_BINARY_PATH'


class Emulator:
  """Spanner emulator python wrapper.

  Below is an example of how this wrapper can be used in a test class.

  class SpannerTest(unittest.TestCase):

    def setUp(self):
      super().setUp()
      self._spanner_emulator = emulator.Emulator()
      self.addCleanup(self._spanner_emulator.stop)

    def test_something(self):
      spanner_service = self._spanner_emulator.get_service()
      # Create an instance and a database, then open sessions on it
  """

  def __init__(self,
               *,
               spanner_emulator_port: Optional[int] = None,
               log_emulator_requests: bool = False) -> None:
    """Initializer.

    Args:
      spanner_emulator_port: The port to start the emulator on. A random unused
        port is picked if this value is None.
      log_emulator_requests: If true, the emulator subprocess will log each
        request and response message.
    """

    self._spanner_emulator_port = spanner_emulator_port
    self._log_emulator_requests = log_emulator_requests

    self._process = None
    self._host_port = None

    self._start()
    self._wait_for_ready()

  @property
  def host_port(self) -> Optional[str]:
    return self._host_port

  def get_service(self, project: str = 'test-project') -> service.Service:
    """Returns a Service connected to the emulator over an insecure channel.

    Args:
      project: Name of the project that the service should point to.
    """
    return service.connect(
        project,
        credentials=connection.INSECURE_CREDENTIALS,
        host=self._host_port)

  def _start(self) -> None:
    """Starts the emulator as a subprocess."""
    port = self._spanner_emulator_port or portpicker.pick_unused_port()
    self._host_port = f'localhost:{port}'

    try:
      emulator_binary_path = os.environ[EMULATOR_BINARY_PATH_ENV_VAR]
    except KeyError as key_error:
      raise ValueError(
          f'Please set the environment variable {EMULATOR_BINARY_PATH_ENV_VAR} '
          'to a binary with the Cloud Spanner Emulator. For more info, see '
          'https://github.com/GoogleCloudPlatform/cloud-spanner-emulator.'
      ) from key_error

    self._process = subprocess.Popen([
        emulator_binary_path,
        '--log_requests' if self._log_emulator_requests else '--nolog_requests',
        '--host_port',
        self._host_port,
    ])

  def _wait_for_ready(self) -> None:
    """Waits for the emulator to become ready."""
    call_options = {'timeout': 60}
    # This will not return until the emulator is running.
    self.get_service().list_instance_configs(call_options=call_options)

  def stop(self) -> None:
    """If there is an emulator process, stops it and waits for it to stop."""
    if self._process is not None:
      self._process.terminate()
      self._process.wait()
      self._process = None
      self._host_port = None
