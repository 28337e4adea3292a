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

"""Sets up shortcuts for imports from the library."""
import logging

from spanner_service import connection
from spanner_service import error
from spanner_service import retry
from spanner_service import routing
from spanner_service import service
from spanner_service import version

# add NullHandler to root-module logger so that individual modules
# won't have to.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# pylint: disable=invalid-name
__version__ = version.__version__

Service = service.Service
ServiceConnection = connection.ServiceConnection
connect = service.connect
INSECURE_CREDENTIALS = connection.INSECURE_CREDENTIALS

SpannerServiceError = error.SpannerServiceError
UnsupportedDescriptorSetError = error.UnsupportedDescriptorSetError

is_retryable = retry.is_retryable
DEFAULT_RETRY = retry.DEFAULT_RETRY

ROUTE_TO_LEADER_HEADER = routing.ROUTE_TO_LEADER_HEADER
