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
"""spanner_service setup file."""
from setuptools import setup

setup(
    name='spanner-service',
    version='0.1.0',
    description='Keyword-style facade over the Cloud Spanner gRPC API',
    maintainer='Python Spanner service developers',
    packages=['spanner_service', 'spanner_service.admin'],
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=[
        'google-api-core[grpc] >= 2.11, <3',
        'google-auth >= 2, <3',
        'google-cloud-spanner >= 3.46, <4',
        'grpcio >= 1.51',
        'immutabledict',
        'protobuf >= 3.20',
    ],
    tests_require=['absl-py', 'portpicker'],
    extras_require={
        'test': ['absl-py', 'portpicker', 'pytest'],
    },
    entry_points={
        'console_scripts': [
            'spanner-service = spanner_service.admin.scripts:main'
        ]
    })
