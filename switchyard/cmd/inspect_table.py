#!/usr/bin/env python
# Copyright 2026 by the Switchyard authors
#
# Licensed under the Apache License, Version 2.0 (the 'License');
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an 'AS IS' BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Script that prints out the routes of a RouteTable instance, and optionally
matches a request or renders a path against it.
"""
import argparse
import importlib
import logging
import os
import sys

import switchyard
from switchyard.inspect import inspect_match
from switchyard.inspect import inspect_table

sys.path.append(os.getcwd())


def make_parser():
    """Create the parser for the command line tool."""
    parser = argparse.ArgumentParser(
        description='Example: switchyard-inspect-table myprogram:routes'
    )
    parser.add_argument(
        '-v',
        '--verbose',
        action='store_true',
        help='More verbose output, including debug logging',
    )
    parser.add_argument(
        '-m',
        '--match',
        nargs=2,
        metavar=('METHOD', 'PATH'),
        help='Match a request against the table instead of listing the routes',
    )
    parser.add_argument(
        '-b',
        '--build',
        nargs='+',
        metavar='ARG',
        help=(
            'Render a path for a named route: NAME [KEY=VALUE ...]. '
            'Use "-" as the name to select the route by its parameters'
        ),
    )
    parser.add_argument(
        'table_module',
        help='The module and table to inspect. Example: myapp.somemodule:routes',
    )
    return parser


def load_table(parser, args):
    try:
        module, instance = args.table_module.split(':', 1)
    except ValueError:
        parser.error(
            'The table_module must include a colon between the module and instance'
        )
    try:
        table = getattr(importlib.import_module(module), instance)
    except AttributeError:
        parser.error('{!r} not found in module {!r}'.format(instance, module))

    if not isinstance(table, switchyard.RouteTable):
        if callable(table):
            table = table()
            if not isinstance(table, switchyard.RouteTable):
                parser.error(
                    '{} did not return a switchyard.RouteTable instance'.format(
                        args.table_module
                    )
                )
        else:
            parser.error(
                'The instance must be a switchyard.RouteTable or '
                'a callable without args that returns a switchyard.RouteTable'
            )
    return table


def parse_params(parser, items):
    params = {}
    for item in items:
        try:
            name, value = item.split('=', 1)
        except ValueError:
            parser.error('Parameters must be given as KEY=VALUE, got {!r}'.format(item))
        params[name] = value
    return params


def build_path(parser, table, args):
    name, *items = args.build
    params = parse_params(parser, items)

    try:
        if name == '-':
            return table.build_path_by_match(params)
        return table.build_path_by_name(name, params)
    except (
        switchyard.MissingParameterValue,
        switchyard.NoRouteMatchesParameters,
        switchyard.NoSuchRoute,
    ) as ex:
        parser.exit(1, '{}\n'.format(ex))


def main():
    parser = make_parser()
    args = parser.parse_args()

    if args.verbose:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter('%(name)s: %(message)s'))
        logger = logging.getLogger('switchyard')
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)

    table = load_table(parser, args)

    if args.match:
        method, path = args.match
        match = table.match_forward(method, path)
        print(inspect_match(match, method.upper(), path).to_string(args.verbose))
    elif args.build:
        print(build_path(parser, table, args))
    else:
        print(inspect_table(table).to_string(args.verbose))


if __name__ == '__main__':  # pragma: no cover
    main()
