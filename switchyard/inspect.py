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

"""Inspect utilities for route tables."""

from typing import Any, Dict, List, Mapping, Optional

from switchyard.routing.route import Route
from switchyard.routing.table import RouteMatch
from switchyard.routing.table import RouteTable


def inspect_table(table: RouteTable) -> 'TableInfo':
    """Inspects a route table.

    Args:
        table (switchyard.RouteTable): The table to inspect.

    Returns:
        TableInfo: The information regarding the table. Call
        :meth:`~.TableInfo.to_string` on the result to obtain a
        human-friendly representation.
    """
    return TableInfo(
        inspect_routes(table), sorted(table.options.context_parameter_names)
    )


def inspect_routes(table: RouteTable) -> 'List[RouteInfo]':
    """Inspects the routes of a table.

    Args:
        table (switchyard.RouteTable): The table to inspect.

    Returns:
        List[RouteInfo]: A list of route descriptions, in priority order.
    """
    return [inspect_route(route) for route in table]


def inspect_route(route: Route) -> 'RouteInfo':
    """Inspects a single route."""
    return RouteInfo(
        route.name,
        route.template,
        route.display_template,
        sorted(route.methods or ()),
        sorted(route.excluded_methods or ()),
        dict(route.static_params),
        dict(route.default_static_params),
    )


def inspect_match(match: Optional[RouteMatch], method: str, path: str) -> 'MatchInfo':
    """Describe the result of :meth:`.RouteTable.match_forward`.

    Args:
        match (RouteMatch): The match, or ``None`` if no route matched.
        method (str): The request method that was matched.
        path (str): The request path that was matched.
    """
    if match is None:
        return MatchInfo(method, path, None, {})

    return MatchInfo(method, path, inspect_route(match.route), match.parameters)


class _Traversable:
    __visit_name__ = 'N/A'

    def to_string(self, verbose=False) -> str:
        """Return a string representation of this class.

        Args:
            verbose (bool, optional): Adds more information. Defaults to False.

        Returns:
            str: string representation of this class.
        """
        return StringVisitor(verbose).process(self)

    def __repr__(self):
        return self.to_string()


class RouteInfo(_Traversable):
    """Describes a route.

    Args:
        name (str): The name of the route, or ``None``.
        template (str): The route's path template.
        display_template (str): The template with ``${name}`` placeholders.
        methods (List[str]): Allowed methods; empty if any is allowed.
        excluded_methods (List[str]): Methods the route never matches.
        static_params (dict): The route's static values.
        default_static_params (dict): The route's default static values.
    """

    __visit_name__ = 'route'

    def __init__(
        self,
        name: Optional[str],
        template: str,
        display_template: str,
        methods: List[str],
        excluded_methods: List[str],
        static_params: Dict[str, Any],
        default_static_params: Dict[str, Any],
    ):
        self.name = name
        self.template = template
        self.display_template = display_template
        self.methods = methods
        self.excluded_methods = excluded_methods
        self.static_params = static_params
        self.default_static_params = default_static_params


class MatchInfo(_Traversable):
    """Describes the result of matching a request.

    Args:
        method (str): The request method.
        path (str): The request path.
        route (RouteInfo): The route that matched, or ``None``.
        parameters (dict): The parameters of the match.
    """

    __visit_name__ = 'match'

    def __init__(
        self,
        method: str,
        path: str,
        route: Optional[RouteInfo],
        parameters: Mapping[str, Any],
    ):
        self.method = method
        self.path = path
        self.route = route
        self.parameters = dict(parameters)


class TableInfo(_Traversable):
    """Describes a route table.

    Args:
        routes (List[RouteInfo]): The routes of the table.
        context_parameter_names (List[str]): See
            :attr:`.RouteTableOptions.context_parameter_names`.
    """

    __visit_name__ = 'table'

    def __init__(self, routes: List[RouteInfo], context_parameter_names: List[str]):
        self.routes = routes
        self.context_parameter_names = context_parameter_names

    def to_string(self, verbose=False, name='') -> str:
        """Return a string representation of this class.

        Args:
            verbose (bool, optional): Adds more information. Defaults to False.
            name (str, optional): The name of the table, to be output at the
                beginning of the text. Defaults to ``'Route Table'``.

        Returns:
            str: A string representation of the table.
        """
        return StringVisitor(verbose, name).process(self)


# ------------------------------------------------------------------------
# Visitors
# ------------------------------------------------------------------------


class InspectVisitor:
    """Base visitor class that implements the `process` method.

    Subclasses must implement ``visit_<name>`` methods for each supported class.
    """

    def process(self, instance: _Traversable):
        """Process the instance, by calling the appropriate visit method.

        Uses the `__visit_name__` attribute of the `instance` to obtain the method to use.

        Args:
            instance (_Traversable): The instance to process.
        """
        try:
            return getattr(self, 'visit_{}'.format(instance.__visit_name__))(instance)
        except AttributeError as e:
            raise RuntimeError(
                'This visitor does not support {}'.format(type(instance))
            ) from e


class StringVisitor(InspectVisitor):
    """Visitor that returns a string representation of the info class.

    This is used automatically by calling ``to_string()`` on the info class.
    It can also be used directly by calling ``StringVisitor.process(info_instance)``.

    Args:
        verbose (bool, optional): Adds more information. Defaults to ``False``.
        name (str, optional): The name of the table, to be output at the
            beginning of the text. Defaults to ``'Route Table'``.
    """

    def __init__(self, verbose=False, name=''):
        self.verbose = verbose
        self.name = name
        self.indent = 0

    @property
    def tab(self):
        """Get the current tabulation."""
        return ' ' * self.indent

    def _values_to_string(self, label: str, values: Mapping[str, Any]) -> str:
        """Return a string from a dict of parameter values."""
        items = ', '.join('{}={!r}'.format(k, values[k]) for k in sorted(values))
        return '{}{}: {{{}}}'.format(self.tab + ' ' * 4, label, items)

    def visit_route(self, route: RouteInfo) -> str:
        """Visit a RouteInfo instance. Usually called by `process`."""
        methods = ','.join(route.methods) or '*'
        if route.excluded_methods:
            methods += ' !' + ','.join(route.excluded_methods)

        text = '{0}⇒ {1} {2.template}'.format(self.tab, methods, route)
        if route.name:
            text += ' - {0.name}'.format(route)

        if not self.verbose:
            return text

        lines = [text]
        if route.static_params:
            lines.append(self._values_to_string('static', route.static_params))
        if route.default_static_params:
            lines.append(
                self._values_to_string('defaults', route.default_static_params)
            )

        return '\n'.join(lines)

    def visit_match(self, match: MatchInfo) -> str:
        """Visit a MatchInfo instance. Usually called by `process`."""
        text = '{0}{1.method} {1.path}'.format(self.tab, match)
        if match.route is None:
            return text + ' - no match'

        text += ':\n' + self.process(match.route)
        return '{}\n{}'.format(text, self._values_to_string('params', match.parameters))

    def visit_table(self, table: TableInfo) -> str:
        """Visit a TableInfo instance. Usually called by `process`."""
        self.indent = 4
        text = '{} ({} routes)'.format(self.name or 'Route Table', len(table.routes))

        if table.routes:
            routes = '\n'.join(self.process(r) for r in table.routes)
            text += '\n• Routes:\n{}'.format(routes)

        if self.verbose and table.context_parameter_names:
            text += '\n• Context parameters: {}'.format(
                ', '.join(table.context_parameter_names)
            )

        return text
