# Copyright 2026 by the Switchyard authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Primary package for Switchyard, a two-way URL routing engine.

Switchyard matches requests against an ordered table of path templates,
and renders paths back from parameters, either for a named route or for
the route that best matches the parameters::

    import switchyard

    table = switchyard.RouteTable([
        switchyard.Route(
            '/lectures/:id/:action',
            static_params={'controller': 'lecture', 'action': 'show'},
            name='lecture',
        ),
    ])

    match = table.match_forward('GET', '/lectures/42/edit')
    path = table.build_path_by_name('lecture', {'id': 7})
"""

import logging as _logging

__all__ = (
    # Routing
    'parse',
    'Pattern',
    'ParameterSegment',
    'Route',
    'RouteMatch',
    'RouteTable',
    'RouteTableOptions',
    'RouteTableBuilder',
    'ResourceTemplate',
    'StaticSegment',
    'ValuePatternDict',
    # Public constants
    'HTTP_METHODS',
    'WEBDAV_METHODS',
    'COMBINED_METHODS',
    # Errors
    'DuplicateRouteNameError',
    'MissingParameterValue',
    'NoRouteMatchesParameters',
    'NoSuchRoute',
    'PatternSyntaxError',
    'RouteNotPreparedError',
    # Package version
    '__version__',
)

from switchyard.constants import COMBINED_METHODS
from switchyard.constants import HTTP_METHODS
from switchyard.constants import WEBDAV_METHODS
from switchyard.errors import DuplicateRouteNameError
from switchyard.errors import MissingParameterValue
from switchyard.errors import NoRouteMatchesParameters
from switchyard.errors import NoSuchRoute
from switchyard.errors import PatternSyntaxError
from switchyard.errors import RouteNotPreparedError
from switchyard.mapper import ResourceTemplate
from switchyard.mapper import RouteTableBuilder
from switchyard.routing import parse
from switchyard.routing import ParameterSegment
from switchyard.routing import Pattern
from switchyard.routing import Route
from switchyard.routing import RouteMatch
from switchyard.routing import RouteTable
from switchyard.routing import RouteTableOptions
from switchyard.routing import StaticSegment
from switchyard.routing import ValuePatternDict
from switchyard.version import __version__

_logger = _logging.getLogger('switchyard')
_logger.addHandler(_logging.NullHandler())
