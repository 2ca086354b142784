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

"""Fluent construction of route tables.

A :class:`RouteTableBuilder` collects routes in declaration order. Options
set on a builder (a pattern prefix, static values, allowed methods, etc.)
apply to every route declared through it afterwards, and to the routes of
its nested builders::

    builder = RouteTableBuilder()
    builder.match('/', name='home', static_params={'controller': 'home'})

    admin = builder.nested().append('/admin/')
    admin.set_param('controller', 'admin')
    admin.match(':action', default_static_params={'action': 'index'})

    builder.resources('lecture', '/lectures')

    table = builder.build()
"""

from __future__ import annotations

import logging
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Union,
)

from switchyard.routing.pattern import Pattern
from switchyard.routing.route import Route
from switchyard.routing.table import RouteTable
from switchyard.routing.table import RouteTableOptions

__all__ = ('ResourceTemplate', 'RouteBuilder', 'RouteTableBuilder')

_logger = logging.getLogger(__name__)

MethodsOption = Optional[Union[str, Iterable[str]]]


def _parse_methods(value: MethodsOption) -> Optional[List[str]]:
    if value is None:
        return None

    if isinstance(value, str):
        if value.strip().lower() == 'any':
            return None

        value = value.split(',')

    return [method.strip().upper() for method in value if method.strip()]


class RouteBuilder:
    """Accumulates the options of a single route.

    Args:
        parent (RouteBuilder): Builder whose options are inherited. The
            parent's complete pattern becomes this builder's pattern
            prefix.
    """

    __slots__ = (
        '_applied_params',
        '_pattern',
        '_pattern_prefix',
        'default_static_params',
        'excluded_methods',
        'methods',
        'name',
        'name_prefix',
        'static_params',
        'value_patterns',
    )

    def __init__(self, parent: Optional[RouteBuilder] = None) -> None:
        self._applied_params: Optional[Dict[str, Any]] = None
        self._pattern = Pattern()
        self.name: Optional[str] = None

        if parent is None:
            self._pattern_prefix = Pattern()
            self.name_prefix = ''
            self.static_params: Dict[str, Any] = {}
            self.default_static_params: Dict[str, Any] = {}
            self.value_patterns: Dict[str, str] = {}
            self.methods: Optional[List[str]] = None
            self.excluded_methods: Optional[List[str]] = None
        else:
            self._pattern_prefix = parent.pattern
            self.name_prefix = parent.name_prefix
            self.static_params = dict(parent.static_params)
            self.default_static_params = dict(parent.default_static_params)
            self.value_patterns = dict(parent.value_patterns)
            self.methods = parent.methods
            self.excluded_methods = parent.excluded_methods

    @property
    def pattern(self) -> Pattern:
        """The complete pattern: the prefix followed by appended pieces."""
        return self._pattern_prefix.append(self._pattern)

    @property
    def full_name(self) -> Optional[str]:
        if self.name is None:
            return None

        return self.name_prefix + self.name

    def append(self, pattern: Union[str, Pattern]) -> RouteBuilder:
        self._pattern = self._pattern.append(pattern)
        return self

    def set_option(self, option: str, value: Any) -> RouteBuilder:
        """Set an option by name.

        Supported options are ``name``, ``name_prefix``, ``pattern``,
        ``pattern_prefix``, ``methods`` and ``excluded_methods``. Methods
        may be given as a comma-separated string; ``'any'`` removes the
        restriction.

        Raises:
            ValueError: The option is not supported.
        """

        if option == 'name':
            self.name = value
        elif option == 'name_prefix':
            self.name_prefix = value
        elif option == 'pattern':
            self._pattern = Pattern.parse(value)
        elif option == 'pattern_prefix':
            self._pattern_prefix = Pattern.parse(value)
        elif option == 'methods':
            self.methods = _parse_methods(value)
        elif option == 'excluded_methods':
            self.excluded_methods = _parse_methods(value)
        else:
            raise ValueError('Invalid option name: {0!r}'.format(option))

        return self

    def set_param(self, name: str, value: Any) -> RouteBuilder:
        self.static_params[name] = value
        return self

    def set_default(self, name: str, value: Any) -> RouteBuilder:
        self.default_static_params[name] = value
        return self

    def set_value_pattern(self, name: str, value_pattern: str) -> RouteBuilder:
        self.value_patterns[name] = value_pattern
        return self

    def apply(self, fixed_params: Mapping[str, Any]) -> RouteBuilder:
        """Fix some of the pattern's parameters in the created route."""
        self._applied_params = dict(fixed_params)
        return self

    def create_route(self) -> Route:
        if self._applied_params is not None:
            return self.create_applied_route(self._applied_params)

        return Route(
            self.pattern,
            static_params=self.static_params,
            default_static_params=self.default_static_params,
            methods=self.methods,
            excluded_methods=self.excluded_methods,
            name=self.full_name,
            value_patterns=self.value_patterns,
        )

    def create_applied_route(self, fixed_params: Mapping[str, Any]) -> Route:
        route = Route(
            self.pattern,
            static_params=self.static_params,
            default_static_params=self.default_static_params,
            methods=self.methods,
            excluded_methods=self.excluded_methods,
            value_patterns=self.value_patterns,
        )

        return route.apply_with(fixed_params, name=self.full_name)

    def build_routes(self, routes: List[Route]) -> None:
        routes.append(self.create_route())

    def __repr__(self) -> str:
        return '<{0}: {1!r}>'.format(type(self).__name__, self.pattern.template)


class RouteTableBuilder:
    """Builds a :class:`~.RouteTable` from declarations.

    Routes are added to the table in the order in which they (or the
    nested builders that contain them) were declared.
    """

    __slots__ = ('_definition', '_entries', '_templates')

    def __init__(self, parent: Optional[RouteTableBuilder] = None) -> None:
        self._entries: List[Union[RouteBuilder, RouteTableBuilder]] = []

        if parent is None:
            self._definition = RouteBuilder()
            self._templates: Dict[str, Any] = {}
        else:
            self._definition = RouteBuilder(parent._definition)
            self._templates = dict(parent._templates)

    @property
    def pattern(self) -> Pattern:
        return self._definition.pattern

    def nested(self) -> RouteTableBuilder:
        """Declare a nested builder that inherits this builder's options."""

        nested = RouteTableBuilder(self)
        self._entries.append(nested)
        return nested

    def match(
        self,
        pattern: Optional[Union[str, Pattern]] = None,
        name: Optional[str] = None,
        methods: MethodsOption = None,
        excluded_methods: MethodsOption = None,
        static_params: Optional[Mapping[str, Any]] = None,
        default_static_params: Optional[Mapping[str, Any]] = None,
        value_patterns: Optional[Mapping[str, str]] = None,
    ) -> RouteBuilder:
        """Declare a route.

        The route's pattern is this builder's pattern followed by
        `pattern`. The remaining arguments add to (or, for `name` and
        the methods, replace) the options inherited from this builder.

        Returns:
            RouteBuilder: The route's builder, for further configuration.
        """

        route_builder = RouteBuilder(self._definition)

        if pattern is not None:
            route_builder.append(pattern)
        if name is not None:
            route_builder.set_option('name', name)
        if methods is not None:
            route_builder.set_option('methods', methods)
        if excluded_methods is not None:
            route_builder.set_option('excluded_methods', excluded_methods)

        route_builder.static_params.update(static_params or {})
        route_builder.default_static_params.update(default_static_params or {})
        route_builder.value_patterns.update(value_patterns or {})

        self._entries.append(route_builder)
        return route_builder

    def apply(self, fixed_params: Mapping[str, Any], **kwargs: Any) -> RouteBuilder:
        """Declare a route with some of the pattern's parameters fixed.

        Keyword arguments are the same as for :meth:`match`.
        """

        return self.match(**kwargs).apply(fixed_params)

    def append(self, pattern: Union[str, Pattern]) -> RouteTableBuilder:
        """Append to the pattern prefix of the routes declared from now on."""
        self._definition.append(pattern)
        return self

    def set_option(self, option: str, value: Any) -> RouteTableBuilder:
        self._definition.set_option(option, value)
        return self

    def get_option(self, option: str) -> Any:
        if option == 'pattern':
            return self._definition.pattern.template

        if option not in ('name', 'name_prefix', 'methods', 'excluded_methods'):
            raise ValueError('Invalid option name: {0!r}'.format(option))

        return getattr(self._definition, option)

    def set_param(self, name: str, value: Any) -> RouteTableBuilder:
        self._definition.set_param(name, value)
        return self

    def set_default(self, name: str, value: Any) -> RouteTableBuilder:
        self._definition.set_default(name, value)
        return self

    def set_value_pattern(self, name: str, value_pattern: str) -> RouteTableBuilder:
        self._definition.set_value_pattern(name, value_pattern)
        return self

    def set_template(self, name: str, template: Any) -> RouteTableBuilder:
        """Register a template under a name.

        A template is an object with an ``apply_template(builder)``
        method. Registered templates are available to this builder and to
        builders nested in it afterwards.
        """

        self._templates[name] = template
        return self

    def template(self, template: Any) -> RouteTableBuilder:
        """Apply a template (or a registered template's name) to a new nested builder.

        Raises:
            KeyError: No template is registered under the given name.
        """

        if isinstance(template, str):
            try:
                template = self._templates[template]
            except KeyError:
                raise KeyError('No template named {0!r}'.format(template)) from None

        nested = self.nested()
        template.apply_template(nested)
        return nested

    def resources(
        self,
        name: str,
        path: str,
        template: Optional[ResourceTemplate] = None,
    ) -> RouteTableBuilder:
        """Declare the routes of a resource.

        The routes are declared in a nested builder whose pattern prefix
        is `path` and whose ``controller`` static value is `name`; see
        :class:`ResourceTemplate` for the routes that are declared.

        Returns:
            RouteTableBuilder: The nested builder.
        """

        scope = self.nested()
        scope.append(path.rstrip('/') + '/')
        scope.set_param('controller', name)

        resource = scope.template(template or ResourceTemplate(name))
        resource.template('member')
        resource.template('collection')

        return scope

    def build_routes(self, routes: List[Route]) -> None:
        for entry in self._entries:
            entry.build_routes(routes)

    def build(self, options: Optional[RouteTableOptions] = None) -> RouteTable:
        """Create a route table from the declared routes."""

        routes: List[Route] = []
        self.build_routes(routes)

        _logger.debug('Built %d routes', len(routes))
        return RouteTable(routes, options=options)


class ResourceTemplate:
    """Declares the conventional routes of a resource.

    Applying the template registers two more templates, ``'member'`` and
    ``'collection'``, on the builder. Member routes are declared
    relative to the builder's pattern as follows:

    ========  ==================  ===============================
    Method    Pattern             Action
    ========  ==================  ===============================
    PUT       ``:id``             update
    DELETE    ``:id``             destroy
    any       ``:id/[show]``      show
    any       ``:id/edit``        edit
    any       ``:id/:action``     from the path, default show
    ========  ==================  ===============================

    and collection routes as follows:

    ========  ==================  ===============================
    Method    Pattern             Action
    ========  ==================  ===============================
    POST      (empty)             create
    any       ``[index]``         index
    any       ``:action``         from the path, default index
    ========  ==================  ===============================

    The first action of each group is the default action. Routes that
    have a fixed action are named ``<name>_<action>`` when `name` is
    given.

    Args:
        name (str): Resource name used for route names (default ``None``).

    Keyword Args:
        id_param (str): Name of the member identifier parameter.
        id_value_pattern (str): Value pattern of the identifier. Member
            routes are declared before collection routes, so the default
            only accepts digits, to keep collection actions reachable.
            Pass ``None`` to accept any single path segment.
        action_param (str): Name of the action parameter.
    """

    collection_actions = ('index',)
    collection_action_methods = {'POST': 'create'}
    member_actions = ('show', 'edit')
    member_action_methods = {'PUT': 'update', 'DELETE': 'destroy'}

    def __init__(
        self,
        name: Optional[str] = None,
        id_param: str = 'id',
        id_value_pattern: Optional[str] = '[0-9]+',
        action_param: str = 'action',
    ) -> None:
        self.name = name
        self.id_param = id_param
        self.id_value_pattern = id_value_pattern
        self.action_param = action_param

    def apply_template(self, builder: RouteTableBuilder) -> None:
        builder.set_template('member', _MemberTemplate(self))
        builder.set_template('collection', _CollectionTemplate(self))

    def route_name(self, action: str) -> Optional[str]:
        if self.name is None:
            return None

        return '{0}_{1}'.format(self.name, action)

    def declare_actions(
        self,
        builder: RouteTableBuilder,
        actions: Iterable[str],
        action_methods: Mapping[str, str],
        separator: str = '',
    ) -> None:
        """Declare the routes of one group of actions on `builder`."""

        actions = list(actions)
        default_action = actions[0]

        builder.set_param(self.action_param, default_action)
        builder.set_default(self.action_param, default_action)

        for method, action in action_methods.items():
            builder.match(
                name=self.route_name(action),
                methods=method,
                static_params={self.action_param: action},
            )

        builder.append(separator + ':' + self.action_param)
        for action in actions:
            builder.apply({self.action_param: action}, name=self.route_name(action))

        builder.match()


class _MemberTemplate:
    def __init__(self, resource: ResourceTemplate) -> None:
        self._resource = resource

    def apply_template(self, builder: RouteTableBuilder) -> None:
        resource = self._resource

        builder.append(':' + resource.id_param)
        if resource.id_value_pattern is not None:
            builder.set_value_pattern(resource.id_param, resource.id_value_pattern)

        resource.declare_actions(
            builder,
            resource.member_actions,
            resource.member_action_methods,
            separator='/',
        )


class _CollectionTemplate:
    def __init__(self, resource: ResourceTemplate) -> None:
        self._resource = resource

    def apply_template(self, builder: RouteTableBuilder) -> None:
        resource = self._resource
        resource.declare_actions(
            builder,
            resource.collection_actions,
            resource.collection_action_methods,
        )
