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

"""Routing engine.

This package implements the path template compiler, compiled patterns,
routes and the ordered route table.
"""

from switchyard.routing.builder import build_path
from switchyard.routing.compiler import parse
from switchyard.routing.compiler import parse_segments
from switchyard.routing.pattern import Pattern
from switchyard.routing.route import Route
from switchyard.routing.route import ValuePatternDict
from switchyard.routing.segments import ParameterSegment
from switchyard.routing.segments import StaticSegment
from switchyard.routing.table import RouteMatch
from switchyard.routing.table import RouteTable
from switchyard.routing.table import RouteTableOptions
