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

"""Ordered route table."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
)

from switchyard import constants
from switchyard.errors import DuplicateRouteNameError
from switchyard.errors import NoRouteMatchesParameters
from switchyard.errors import NoSuchRoute
from switchyard.routing.route import Route

__all__ = ('RouteMatch', 'RouteTable', 'RouteTableOptions')

_logger = logging.getLogger(__name__)


class RouteMatch(NamedTuple):
    """The result of matching a request against a route table.

    Attributes:
        route (Route): The first route that matched.
        parameters (dict): The route's parameters for the request.
    """

    route: Route
    parameters: Dict[str, Any]


class RouteTableOptions:
    """Defines a set of configurable route table options.

    Attributes:
        context_parameter_names (frozenset): Names of the parameters that
            are carried over from a request's match to the paths rendered
            while handling that request; see
            :meth:`RouteTable.context_parameters`. Defaults to
            ``{'controller'}``, so that a link to another action of the
            current controller does not have to name the controller again.
        eager_compile (bool): Whether to compile the regular expressions
            of all routes when the table is created (default ``True``).
            When ``False``, each pattern is compiled the first time it is
            used instead.
    """

    __slots__ = ('context_parameter_names', 'eager_compile')

    def __init__(
        self,
        context_parameter_names: Iterable[str] = constants.DEFAULT_CONTEXT_PARAMETER_NAMES,
        eager_compile: bool = True,
    ) -> None:
        self.context_parameter_names = frozenset(context_parameter_names)
        self.eager_compile = eager_compile


class RouteTable:
    """An ordered collection of routes.

    The order of the routes is their priority when matching requests:
    the first route that matches a request wins. When looking up a route
    by parameters instead, the route that matches the most parameters
    wins.

    Tables are not modified once created, and may be shared between
    threads. To change the routes of an application, build a new table
    and replace the old one.

    Args:
        routes: The routes, in order of priority.

    Keyword Args:
        options (RouteTableOptions): Table options (see
            :class:`RouteTableOptions`).

    Raises:
        DuplicateRouteNameError: Two routes have the same name.
    """

    __slots__ = ('_named_routes', '_options', '_routes')

    def __init__(
        self,
        routes: Iterable[Route] = (),
        options: Optional[RouteTableOptions] = None,
    ) -> None:
        self._options = options or RouteTableOptions()
        self._routes: Tuple[Route, ...] = tuple(routes)

        named_routes: Dict[str, Route] = {}
        for route in self._routes:
            if route.name is not None:
                if route.name in named_routes:
                    raise DuplicateRouteNameError(
                        'Route names may not be duplicated '
                        '("{0}" was used more than once)'.format(route.name)
                    )

                named_routes[route.name] = route

        self._named_routes = MappingProxyType(named_routes)

        for route in self._routes:
            route.prepare()
            if self._options.eager_compile:
                route.pattern.compile()

        _logger.debug(
            'Assembled route table with %d routes (%d named)',
            len(self._routes),
            len(named_routes),
        )

    @property
    def options(self) -> RouteTableOptions:
        return self._options

    @property
    def routes(self) -> Tuple[Route, ...]:
        return self._routes

    @property
    def named_routes(self) -> Mapping[str, Route]:
        """A read-only mapping of route names to routes."""
        return self._named_routes

    def match_forward(self, method: str, path: str) -> Optional[RouteMatch]:
        """Find the first route that matches a request.

        Args:
            method (str): The request's HTTP method.
            path (str): The request path, relative to the application root.

        Returns:
            RouteMatch: The matching route and its parameters, or ``None``
            if no route matches.
        """

        for route in self._routes:
            params = route.match_forward(path, method)
            if params is not None:
                return RouteMatch(route, params)

        _logger.debug('No route matches %s %r', method, path)
        return None

    def match_reverse(
        self,
        params: Mapping[str, Any],
        context_params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Route]:
        """Find the route that best matches a set of parameters.

        Every route is scored with :meth:`Route.match_reverse`. The route
        with the highest score wins; when several routes share that score,
        the one declared first wins. A route must score above zero to be
        selected.

        Args:
            params (dict): Explicit parameter values.
            context_params (dict): Fallback parameter values.

        Returns:
            Route: The best matching route, or ``None``.
        """

        best_score = 0
        best_route = None

        for route in self._routes:
            score = route.match_reverse(params, context_params)
            if score > best_score:
                best_score = score
                best_route = route

        if best_route is None:
            _logger.debug('No route matches parameters %r', sorted(params))

        return best_route

    def get_named_route(self, name: str) -> Optional[Route]:
        return self._named_routes.get(name)

    def build_path_by_name(
        self,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        context_params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a path for a named route.

        Raises:
            NoSuchRoute: There is no route with the given name.
            MissingParameterValue: A parameter value is missing.
        """

        route = self._named_routes.get(name)
        if route is None:
            raise NoSuchRoute(name)

        return route.build_path(params, context_params)

    def build_path_by_match(
        self,
        params: Mapping[str, Any],
        context_params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a path for the route that best matches the parameters.

        Raises:
            NoRouteMatchesParameters: No route matches the parameters.
            MissingParameterValue: A parameter value is missing.
        """

        route = self.match_reverse(params, context_params)
        if route is None:
            raise NoRouteMatchesParameters(params)

        return route.build_path(params, context_params)

    def context_parameters(self, match: RouteMatch) -> Dict[str, Any]:
        """Return the parameters of a match that scope rendered paths.

        The result is meant to be passed as `context_params` when
        rendering paths while handling the matched request.
        """

        names = self._options.context_parameter_names
        return {
            name: value for name, value in match.parameters.items() if name in names
        }

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return '<{0}: {1} routes>'.format(type(self).__name__, len(self._routes))
