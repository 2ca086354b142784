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

"""Path rendering for compiled patterns."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from switchyard.errors import MissingParameterValue
from switchyard.routing.segments import Segment
from switchyard.routing.segments import StaticSegment

__all__ = ('build_path', 'resolve_value')

_EMPTY: Mapping[str, Any] = {}


def resolve_value(
    name: str,
    params: Mapping[str, Any],
    static_params: Mapping[str, Any],
    context_params: Mapping[str, Any],
) -> Optional[Any]:
    """Look up a value by name from the three rendering sources.

    Explicit parameters take precedence over static values, which take
    precedence over context parameters. A value of ``None`` is treated
    the same as a missing one.
    """

    for source in (params, static_params, context_params):
        value = source.get(name)
        if value is not None:
            return value

    return None


def build_path(
    segments: Sequence[Segment],
    params: Optional[Mapping[str, Any]] = None,
    static_params: Optional[Mapping[str, Any]] = None,
    context_params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Render a concrete path from a sequence of segments.

    Segments are rendered in order. Trailing segments that are not
    required, and trailing parameters whose value is the same as their
    static value, are dropped from the result.

    Args:
        segments: The segments of a compiled pattern.
        params (dict): Explicit parameter values.
        static_params (dict): Static parameter values of the route.
        context_params (dict): Fallback values, typically inherited from
            the current request's match.

    Returns:
        str: The rendered path.

    Raises:
        MissingParameterValue: No value is available for a parameter.
    """

    params = params or _EMPTY
    static_params = static_params or _EMPTY
    context_params = context_params or _EMPTY

    rendered = []
    length = 0
    required_length = 0

    for segment in segments:
        if isinstance(segment, StaticSegment):
            text = segment.text
            required = segment.required
        else:
            value = resolve_value(segment.name, params, static_params, context_params)
            if value is None:
                raise MissingParameterValue(segment.name)

            text = str(value)
            static_value = static_params.get(segment.name)
            required = segment.required or (
                static_value is None or text != str(static_value)
            )

        rendered.append(text)
        length += len(text)
        if required:
            required_length = length

    return ''.join(rendered)[:required_length]
