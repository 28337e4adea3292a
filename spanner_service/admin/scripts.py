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
"""Entry point for spanner_service scripts."""

import argparse
import logging
from typing import Any, List, Optional

from spanner_service import connection
from spanner_service import service as service_lib


def _service(args: Any) -> service_lib.Service:
  credentials = connection.INSECURE_CREDENTIALS if args.emulator else None
  return service_lib.connect(
      args.project, credentials=credentials, host=args.host)


def list_instances(args: Any) -> None:
  response = _service(args).list_instances(max=args.page_size)
  for instance in response.instances:
    print(instance.name)


def list_instance_configs(args: Any) -> None:
  response = _service(args).list_instance_configs(max=args.page_size)
  for instance_config in response.instance_configs:
    print(instance_config.name)


def list_databases(args: Any) -> None:
  response = _service(args).list_databases(args.instance, max=args.page_size)
  for database in response.databases:
    print(database.name)


def show_ddl(args: Any) -> None:
  response = _service(args).get_database_ddl(args.instance, args.database)
  for statement in response.statements:
    print(statement)


def list_backups(args: Any) -> None:
  backups = _service(args).list_backups(
      args.instance, filter=args.filter, page_size=args.page_size)
  for backup in backups:
    print(backup.name)


def _parser(prog: Optional[str]) -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(prog=prog)
  parser.add_argument('--project', required=True, help='Google Cloud project')
  parser.add_argument('--host', help='Spanner endpoint to connect to')
  parser.add_argument(
      '--emulator',
      action='store_true',
      help='Connect over an insecure channel, e.g. to the Spanner emulator')
  parser.add_argument('--verbose', action='store_true', help='Log each call')
  subparsers = parser.add_subparsers(
      dest='subcommand',
      title='subcommands',
      description='valid subcommands')

  instances_parser = subparsers.add_parser(
      'instances', help='List instances in the project')
  instances_parser.add_argument('--page-size', type=int)
  instances_parser.set_defaults(execute=list_instances)

  configs_parser = subparsers.add_parser(
      'instance-configs', help='List instance configs in the project')
  configs_parser.add_argument('--page-size', type=int)
  configs_parser.set_defaults(execute=list_instance_configs)

  databases_parser = subparsers.add_parser(
      'databases', help='List databases in an instance')
  databases_parser.add_argument('instance', help='Name of Spanner instance')
  databases_parser.add_argument('--page-size', type=int)
  databases_parser.set_defaults(execute=list_databases)

  ddl_parser = subparsers.add_parser('ddl', help='Show the schema of a database')
  ddl_parser.add_argument('instance', help='Name of Spanner instance')
  ddl_parser.add_argument('database', help='Name of Spanner database')
  ddl_parser.set_defaults(execute=show_ddl)

  backups_parser = subparsers.add_parser(
      'backups', help='List backups in an instance')
  backups_parser.add_argument('instance', help='Name of Spanner instance')
  backups_parser.add_argument('--filter', help='Backup filter expression')
  backups_parser.add_argument('--page-size', type=int)
  backups_parser.set_defaults(execute=list_backups)
  return parser


def main(as_module: bool = False, argv: Optional[List[str]] = None) -> None:
  prog = 'spanner-service' if as_module else None
  parser = _parser(prog)
  args = parser.parse_args(argv)
  if args.verbose:
    logging.basicConfig(level=logging.DEBUG)
  if args.subcommand is None:
    parser.print_help()
  else:
    args.execute(args)


if __name__ == '__main__':
  main(as_module=True)
