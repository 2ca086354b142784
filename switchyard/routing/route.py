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

"""Route class and its value pattern mapping."""

from __future__ import annotations

from collections import UserDict
import re
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    FrozenSet,
    Iterable,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from switchyard import constants
from switchyard.errors import PatternSyntaxError
from switchyard.errors import RouteNotPreparedError
from switchyard.routing.pattern import Pattern
from switchyard.routing.segments import ParameterSegment

__all__ = ('Route', 'ValuePatternDict')

_NAME_PATTERN = re.compile('[A-Za-z0-9_]+$')

# NOTE: Sentinel for apply_with(), where None means "any method".
_INHERIT = object()

MethodsArg = Optional[Union[str, Iterable[str]]]


class ValuePatternDict(UserDict):
    """A dict-like class for storing parameter value patterns.

    Keys are parameter names and values are regular expressions that
    a parameter's value must match in place of the default rule::

        route = Route('/lectures/:id', value_patterns={'id': '[0-9]+'})
    """

    def update(self, other=(), **kwargs):
        if hasattr(other, 'keys'):
            other = {name: other[name] for name in other.keys()}
        else:
            # NOTE: Not a mapping type, so assume it is an iterable of
            #   2-item iterables; it may be a generator, so materialize it.
            other = dict(other)

        other.update(kwargs)
        for name, value_pattern in other.items():
            self._validate(name, value_pattern)

        UserDict.update(self, other)

    def __setitem__(self, name, value_pattern):
        self._validate(name, value_pattern)
        UserDict.__setitem__(self, name, value_pattern)

    def _validate(self, name, value_pattern):
        if not isinstance(name, str) or not _NAME_PATTERN.match(name):
            raise PatternSyntaxError(
                'Invalid parameter name {0!r}. Names may not be blank, and may '
                'only use ASCII letters, digits, and underscores.'.format(name)
            )

        try:
            re.compile(value_pattern)
        except (re.error, TypeError) as ex:
            msg = 'Invalid value pattern for parameter "{0}": {1}'.format(name, ex)
            raise PatternSyntaxError(msg) from ex


def _normalize_methods(methods: MethodsArg) -> Optional[FrozenSet[str]]:
    if methods is None:
        return None

    if isinstance(methods, str):
        methods = [methods]

    normalized = frozenset(method.strip().upper() for method in methods)
    for method in normalized:
        if method not in constants.COMBINED_METHODS:
            raise ValueError('Invalid HTTP method: {0!r}'.format(method))

    # NOTE: An empty collection places no restriction on the method.
    return normalized or None


class Route:
    """A path pattern bound to parameter values and HTTP methods.

    A route must be prepared with :meth:`prepare` before it is used for
    matching or rendering. :class:`~.RouteTable` prepares all of its
    routes when it is created.

    Args:
        pattern: A path template string, or a :class:`~.Pattern`.

    Keyword Args:
        static_params (dict): Values that are always part of the route's
            parameters. When one of these names is also a parameter of
            the pattern, the value is used when the parameter is left out
            of the path, and the parameter becomes optional.
        default_static_params (dict): Values that are applied unless
            overridden, and that do not have to be supplied explicitly
            when looking up a route by its parameters.
        methods: HTTP methods the route is restricted to (default any).
        excluded_methods: HTTP methods the route never matches.
        name (str): Optional route name, for lookup by name.
        value_patterns (dict): Regular expressions, keyed by parameter
            name, that override the default value-matching rule.
    """

    __slots__ = (
        '_base_pattern',
        '_default_static_params',
        '_excluded_methods',
        '_methods',
        '_optional_static_params',
        '_pattern',
        '_prepared',
        '_required_path_param_names',
        '_required_static_params',
        '_static_params',
        '_value_patterns',
        'name',
    )

    def __init__(
        self,
        pattern: Union[str, Pattern],
        static_params: Optional[Mapping[str, Any]] = None,
        default_static_params: Optional[Mapping[str, Any]] = None,
        methods: MethodsArg = None,
        excluded_methods: MethodsArg = None,
        name: Optional[str] = None,
        value_patterns: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.name = name
        self._methods = _normalize_methods(methods)
        self._excluded_methods = _normalize_methods(excluded_methods)

        self._value_patterns = ValuePatternDict()
        self._value_patterns.update(value_patterns or {})

        self._static_params: Dict[str, Any] = dict(static_params or {})
        self._default_static_params: Dict[str, Any] = dict(
            default_static_params or {}
        )

        if isinstance(pattern, str):
            pattern = Pattern.parse(pattern)
        self._base_pattern = pattern

        self._reset()

    # -----------------------------------------------------------------
    # Configuration
    # -----------------------------------------------------------------

    @property
    def pattern(self) -> Pattern:
        """The route's pattern, with optional parameters finalized."""
        return self._pattern

    @pattern.setter
    def pattern(self, value: Union[str, Pattern]) -> None:
        if isinstance(value, str):
            value = Pattern.parse(value)

        self._base_pattern = value
        self._reset()

    @property
    def static_params(self) -> Mapping[str, Any]:
        return MappingProxyType(self._static_params)

    @static_params.setter
    def static_params(self, value: Mapping[str, Any]) -> None:
        self._static_params = dict(value)
        self._reset()

    @property
    def default_static_params(self) -> Mapping[str, Any]:
        return MappingProxyType(self._default_static_params)

    @default_static_params.setter
    def default_static_params(self, value: Mapping[str, Any]) -> None:
        self._default_static_params = dict(value)
        self._reset()

    @property
    def value_patterns(self) -> Mapping[str, str]:
        return MappingProxyType(self._value_patterns.data)

    @property
    def methods(self) -> Optional[FrozenSet[str]]:
        """Allowed HTTP methods, or ``None`` if any method is allowed."""
        return self._methods

    @property
    def excluded_methods(self) -> Optional[FrozenSet[str]]:
        return self._excluded_methods

    @property
    def parameter_names(self) -> FrozenSet[str]:
        return self._pattern.parameter_names

    @property
    def template(self) -> str:
        return self._pattern.template

    @property
    def display_template(self) -> str:
        return self._pattern.display_template

    # -----------------------------------------------------------------
    # Derived state
    # -----------------------------------------------------------------

    @property
    def is_prepared(self) -> bool:
        return self._prepared

    @property
    def required_path_param_names(self) -> Tuple[str, ...]:
        """Pattern parameters that have no static or default value."""
        self._require_prepared()
        return self._required_path_param_names

    @property
    def required_static_params(self) -> Mapping[str, Any]:
        """Static values that must be matched exactly by a parameter lookup."""
        self._require_prepared()
        return MappingProxyType(self._required_static_params)

    @property
    def optional_static_params(self) -> Mapping[str, Any]:
        """Static values that are equal to their default value."""
        self._require_prepared()
        return MappingProxyType(self._optional_static_params)

    def prepare(self) -> Route:
        """Derive the parameter sets used for matching by parameters.

        This method must be called before the route is used, and again
        after replacing the route's pattern or static values. Calling it
        more than once is harmless.

        Returns:
            Route: The route itself, to allow chaining.
        """

        required_static = dict(self._static_params)
        optional_static = {}
        required_path = []

        for segment in self._pattern:
            if not isinstance(segment, ParameterSegment):
                continue

            # NOTE: Parameters that occur in the path never have a required
            #   static value; without a static or default value, they must
            #   be supplied.
            if required_static.pop(segment.name, None) is None:
                if segment.name not in self._default_static_params:
                    required_path.append(segment.name)

        for name, default_value in self._default_static_params.items():
            if name in required_static and _same(default_value, required_static[name]):
                optional_static[name] = required_static.pop(name)

        self._required_path_param_names = tuple(required_path)
        self._required_static_params = required_static
        self._optional_static_params = optional_static

        self._prepared = True

        return self

    # -----------------------------------------------------------------
    # Matching and rendering
    # -----------------------------------------------------------------

    def match_forward(
        self, path: str, method: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """Match a request path and method against the route.

        Args:
            path (str): The request path, relative to the application root.
            method (str): The request's HTTP method. If ``None``, the
                method is not checked.

        Returns:
            dict: The route's parameters, i.e. default static values
            overridden by static values, overridden by values from the
            path; or ``None`` if the route does not match.
        """

        self._require_prepared()

        if method is not None:
            method = method.upper()
            if self._methods is not None and method not in self._methods:
                return None
            if self._excluded_methods is not None and method in self._excluded_methods:
                return None

        path_params = self._pattern.match(path)
        if path_params is None:
            return None

        params = dict(self._default_static_params)
        params.update(self._static_params)
        params.update(path_params)

        return params

    def match_reverse(
        self,
        params: Mapping[str, Any],
        context_params: Optional[Mapping[str, Any]] = None,
    ) -> int:
        """Score how well a set of parameters matches the route.

        All parameters required to render the route's path must be
        available, and every static value must either be matched or, when
        it is also the default value, be left out.

        Args:
            params (dict): Explicit parameter values.
            context_params (dict): Fallback parameter values.

        Returns:
            int: The number of matched parameters, or ``-1`` if the route
            does not match.
        """

        self._require_prepared()

        context_params = context_params or {}

        for name in self._required_path_param_names:
            if _lookup(name, params, context_params) is None:
                return -1

        score = len(self._required_path_param_names)

        for name, value in self._required_static_params.items():
            candidate = _lookup(name, params, context_params)
            if candidate is None or not _same(candidate, value):
                return -1

            score += 1

        for name, value in self._optional_static_params.items():
            candidate = _lookup(name, params, context_params)
            if candidate is not None:
                if not _same(candidate, value):
                    return -1

                score += 1

        return score

    def build_path(
        self,
        params: Optional[Mapping[str, Any]] = None,
        context_params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a path for the route.

        Args:
            params (dict): Explicit parameter values. These take precedence
                over the route's static values, which take precedence over
                `context_params`.
            context_params (dict): Fallback parameter values.

        Returns:
            str: The rendered path.

        Raises:
            MissingParameterValue: No value is available for one of the
                pattern's parameters.
        """

        self._require_prepared()

        return self._pattern.build_path(params, self._static_params, context_params)

    def apply_with(
        self,
        fixed_params: Mapping[str, Any],
        methods: Any = _INHERIT,
        excluded_methods: Any = _INHERIT,
        name: Optional[str] = None,
    ) -> Route:
        """Derive a new route with some of the pattern's parameters fixed.

        Each parameter named in `fixed_params` is replaced in the new
        route's pattern by its literal value, and the value is added to
        the new route's static values. This route is not modified.

        Args:
            fixed_params (dict): Values for the parameters to fix.

        Keyword Args:
            methods: Allowed methods of the new route (default: same as
                this route).
            excluded_methods: Excluded methods of the new route (default:
                same as this route).
            name (str): Name of the new route (default ``None``).

        Returns:
            Route: The new, prepared route.
        """

        static_values = dict(self._default_static_params)
        static_values.update(self._static_params)

        static_params = dict(self._static_params)
        static_params.update(fixed_params)

        route = Route(
            self._pattern.apply(fixed_params, static_values),
            static_params=static_params,
            default_static_params=self._default_static_params,
            methods=self._methods if methods is _INHERIT else methods,
            excluded_methods=(
                self._excluded_methods
                if excluded_methods is _INHERIT
                else excluded_methods
            ),
            name=name,
            value_patterns=self._value_patterns,
        )

        return route.prepare()

    # -----------------------------------------------------------------
    # Private
    # -----------------------------------------------------------------

    def _reset(self) -> None:
        optional_names = set(self._static_params) | set(self._default_static_params)
        self._pattern = self._base_pattern.with_options(
            optional_names, self._value_patterns
        )

        self._prepared = False
        self._required_path_param_names: Tuple[str, ...] = ()
        self._required_static_params: Dict[str, Any] = {}
        self._optional_static_params: Dict[str, Any] = {}

    def _require_prepared(self) -> None:
        if not self._prepared:
            raise RouteNotPreparedError(
                'Route {0!r} must be prepared before it is used'.format(self)
            )

    def __repr__(self) -> str:
        methods = ','.join(sorted(self._methods)) if self._methods else '*'
        if self.name:
            return '<{0}: {1} {2} {3!r}>'.format(
                type(self).__name__, self.name, methods, self.template
            )

        return '<{0}: {1} {2!r}>'.format(type(self).__name__, methods, self.template)


def _lookup(
    name: str, params: Mapping[str, Any], context_params: Mapping[str, Any]
) -> Optional[Any]:
    value = params.get(name)
    if value is None:
        value = context_params.get(name)

    return value


def _same(value: Any, other: Any) -> bool:
    return value == other or str(value) == str(other)
