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

"""Error classes raised by the routing engine.

All classes are available directly from the `switchyard` package
namespace::

    import switchyard

    try:
        path = table.build_path_by_name('lecture_show', {'id': 42})
    except switchyard.NoSuchRoute:
        path = '/'

Note that failing to match a request is not an error;
:meth:`~.RouteTable.match_forward` simply returns ``None`` in that case.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

__all__ = (
    'DuplicateRouteNameError',
    'MissingParameterValue',
    'NoRouteMatchesParameters',
    'NoSuchRoute',
    'PatternSyntaxError',
    'RouteNotPreparedError',
)


class PatternSyntaxError(ValueError):
    """A path template (or a value pattern) could not be compiled.

    Attributes:
        template (str): The offending template, if known.
        index (int): Index of the offending character within `template`,
            if known.
    """

    def __init__(
        self,
        message: str,
        template: Optional[str] = None,
        index: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.template = template
        self.index = index


class MissingParameterValue(KeyError):
    """No value could be resolved for a parameter while rendering a path.

    Attributes:
        name (str): Name of the parameter that has no value.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        # NOTE: KeyError.__str__ would render the repr of the name.
        return 'No value for [{0}]'.format(self.name)


class NoSuchRoute(LookupError):
    """The requested route name is not defined in the route table."""

    def __init__(self, name: str) -> None:
        super().__init__('No route named {0!r}'.format(name))
        self.name = name


class NoRouteMatchesParameters(LookupError):
    """No route in the table can render a path for the given parameters."""

    def __init__(self, params: Mapping[str, Any]) -> None:
        names = ', '.join(sorted(params))
        super().__init__('No route matches parameters [{0}]'.format(names))
        self.params = dict(params)


class RouteNotPreparedError(RuntimeError):
    """A route was used for matching or rendering before prepare() was called."""


class DuplicateRouteNameError(ValueError):
    """Two routes in the same table were given the same name."""
