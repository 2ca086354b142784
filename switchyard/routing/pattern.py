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

"""Compiled path patterns."""

from __future__ import annotations

import re
from threading import Lock
from typing import (
    Any,
    Collection,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from switchyard.errors import PatternSyntaxError
from switchyard.routing.builder import build_path
from switchyard.routing.matcher import compile_segments
from switchyard.routing.matcher import match_segments
from switchyard.routing.segments import ParameterSegment
from switchyard.routing.segments import Segment
from switchyard.routing.segments import StaticSegment

__all__ = ('Pattern',)


class Pattern:
    """An immutable, compiled path template.

    A pattern is an ordered sequence of :class:`.StaticSegment` and
    :class:`.ParameterSegment` instances. Patterns are usually created
    by :func:`switchyard.routing.parse`, and may be composed to build
    longer patterns; composition always returns a new pattern::

        users = parse('/users/')
        user = users.append(':id')
        avatar = user.append_static('/avatar')

    The regular expression used for matching is compiled on first use.
    Compilation is guarded by a lock, so that a pattern shared between
    threads is only compiled once.

    Args:
        segments: The segments that make up the pattern.
    """

    __slots__ = (
        '_compile_lock',
        '_parameter_names',
        '_regex',
        '_segments',
    )

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        self._segments: Tuple[Segment, ...] = tuple(segments)

        names = set()
        for segment in self._segments:
            if isinstance(segment, ParameterSegment):
                if segment.name in names:
                    msg = (
                        'Parameter names may not be duplicated '
                        '("{0}" was used more than once)'
                    ).format(segment.name)
                    raise PatternSyntaxError(msg)

                names.add(segment.name)

        self._parameter_names = frozenset(names)
        self._regex: Optional[re.Pattern[str]] = None
        self._compile_lock = Lock()

    @classmethod
    def parse(cls, template: str) -> Pattern:
        """Compile a path template (see :func:`switchyard.routing.parse`)."""

        # NOTE: The compiler module imports this one.
        from switchyard.routing.compiler import parse_segments

        return cls(parse_segments(template))

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    @property
    def parameter_names(self) -> FrozenSet[str]:
        """The names of all parameters in the pattern."""
        return self._parameter_names

    @property
    def display_template(self) -> str:
        """The pattern with parameters rendered as ``${name}`` placeholders.

        This form is meant for simple string substitution by link
        generation helpers, e.g. ``/users/${id}``.
        """

        parts = []
        for segment in self._segments:
            if isinstance(segment, StaticSegment):
                parts.append(segment.text)
            else:
                parts.append('${' + segment.name + '}')

        return ''.join(parts)

    @property
    def template(self) -> str:
        """The pattern rendered back into template syntax."""
        return ''.join(segment.as_template() for segment in self._segments)

    @property
    def regex(self) -> re.Pattern[str]:
        return self.compile()

    def compile(self) -> re.Pattern[str]:
        """Compile the pattern's regular expression, if not done already.

        Returns:
            The compiled regular expression.
        """

        regex = self._regex
        if regex is None:
            with self._compile_lock:
                if self._regex is None:
                    self._regex = compile_segments(self._segments)

                regex = self._regex

        return regex

    def match(self, path: str) -> Optional[Dict[str, str]]:
        """Match a path against the pattern.

        Args:
            path (str): The path to match.

        Returns:
            dict: A dict of parameter values, or ``None`` if the path does
            not match. Optional parameters that were left out of the path
            are not included.
        """

        return match_segments(self.compile(), self._segments, path)

    def build_path(
        self,
        params: Optional[Mapping[str, Any]] = None,
        static_params: Optional[Mapping[str, Any]] = None,
        context_params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Render a path (see :func:`switchyard.routing.builder.build_path`)."""
        return build_path(self._segments, params, static_params, context_params)

    def append(self, other: Union[Pattern, str]) -> Pattern:
        """Return a new pattern with another pattern appended to it.

        Args:
            other: A :class:`Pattern`, or a template string that will be
                compiled first.
        """

        if isinstance(other, str):
            other = Pattern.parse(other)

        return Pattern(_join(self._segments + other.segments))

    def append_static(self, text: str) -> Pattern:
        """Return a new pattern with literal text appended to it."""
        return Pattern(_join(self._segments + (StaticSegment(text),)))

    def append_parameter(
        self,
        name: str,
        allow_slashes: bool = False,
        value_pattern: Optional[str] = None,
    ) -> Pattern:
        """Return a new pattern with a required parameter appended to it."""

        segment = ParameterSegment(
            name, allow_slashes=allow_slashes, value_pattern=value_pattern
        )
        return Pattern(self._segments + (segment,))

    def with_options(
        self,
        optional_names: Collection[str] = (),
        value_patterns: Optional[Mapping[str, str]] = None,
    ) -> Pattern:
        """Return a copy of the pattern with parameter options applied.

        Args:
            optional_names: Names of the parameters that may be left out
                of a matching path. Parameters that are already optional
                stay optional.
            value_patterns (dict): Regular expressions, keyed by parameter
                name, that override the default value-matching rule.
        """

        value_patterns = value_patterns or {}

        segments: List[Segment] = []
        for segment in self._segments:
            if isinstance(segment, ParameterSegment):
                segment = segment._replace(
                    required=segment.required and segment.name not in optional_names,
                    value_pattern=value_patterns.get(
                        segment.name, segment.value_pattern
                    ),
                )

            segments.append(segment)

        return Pattern(segments)

    def apply(
        self,
        fixed_params: Mapping[str, Any],
        static_values: Optional[Mapping[str, Any]] = None,
    ) -> Pattern:
        """Return a copy of the pattern with some parameters fixed.

        Each parameter named in `fixed_params` is replaced by literal text
        carrying its value. The literal is only required when the value
        differs from the parameter's static value, so that a fixed value
        equal to the static value may still be left out of the path.

        Args:
            fixed_params (dict): Values for the parameters to replace.
            static_values (dict): Static (or default) parameter values.
        """

        static_values = static_values or {}

        segments: List[Segment] = []
        for segment in self._segments:
            if isinstance(segment, ParameterSegment):
                value = fixed_params.get(segment.name)
                if value is not None:
                    text = str(value)
                    static_value = static_values.get(segment.name)
                    segment = StaticSegment(
                        text,
                        required=static_value is None or text != str(static_value),
                    )

            segments.append(segment)

        return Pattern(_join(segments))

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented

        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __repr__(self) -> str:
        return '<{0}: {1!r}>'.format(type(self).__name__, self.template)

    def __str__(self) -> str:
        return self.template


def _join(segments: Iterable[Segment]) -> List[Segment]:
    """Merge adjacent required literals and drop empty ones."""

    result: List[Segment] = []
    for segment in segments:
        if isinstance(segment, StaticSegment):
            if not segment.text:
                continue

            if result:
                previous = result[-1]
                if (
                    isinstance(previous, StaticSegment)
                    and previous.required
                    and segment.required
                ):
                    result[-1] = StaticSegment(previous.text + segment.text)
                    continue

        result.append(segment)

    if not result:
        result.append(StaticSegment(''))

    return result
