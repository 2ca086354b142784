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

"""Path template compiler.

Templates are literal text interspersed with parameter markers::

    /users/:id            # 'id' matches a single path segment
    /files/*path          # 'path' may contain slashes
    /lectures/:id.:format # literal text may appear between parameters

Parameter names may only use ASCII letters, digits and underscores.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from switchyard import constants
from switchyard.errors import PatternSyntaxError
from switchyard.routing.pattern import Pattern
from switchyard.routing.segments import ParameterSegment
from switchyard.routing.segments import Segment
from switchyard.routing.segments import StaticSegment

__all__ = ('parse', 'parse_segments')

_MARKER_PATTERN = re.compile(
    '(?P<marker>[{0}{1}])(?P<name>[A-Za-z0-9_]*)'.format(
        re.escape(constants.PARAMETER_MARKER),
        re.escape(constants.SLASH_PARAMETER_MARKER),
    )
)


def parse_segments(template: str) -> Tuple[Segment, ...]:
    """Split a path template into segments.

    Every parameter is initially required and has no custom value
    pattern; see also :meth:`.Pattern.with_options`.

    Args:
        template (str): The path template to compile.

    Returns:
        tuple: The template's segments, in order.

    Raises:
        PatternSyntaxError: A marker is not followed by a parameter name,
            or a parameter name is used more than once.
    """

    if not isinstance(template, str):
        raise TypeError('path template is not a string')

    segments: List[Segment] = []
    used_names = set()
    text_start = 0

    for field in _MARKER_PATTERN.finditer(template):
        marker_index = field.start()
        name = field.group('name')

        if not name:
            found = template[marker_index + 1 :]
            if found:
                msg = "Invalid pattern: expecting name, found '{0}' at index {1}"
                msg = msg.format(found, marker_index)
            else:
                msg = 'Invalid pattern: expecting name, found end of pattern'
            raise PatternSyntaxError(msg, template, marker_index)

        if name in used_names:
            msg = (
                'Parameter names may not be duplicated '
                '("{0}" was used more than once, at index {1})'
            ).format(name, marker_index)
            raise PatternSyntaxError(msg, template, marker_index)

        used_names.add(name)

        text = template[text_start:marker_index]
        if text:
            segments.append(StaticSegment(text))

        segments.append(
            ParameterSegment(
                name,
                allow_slashes=(
                    field.group('marker') == constants.SLASH_PARAMETER_MARKER
                ),
            )
        )
        text_start = field.end()

    text = template[text_start:]
    if text or not segments:
        segments.append(StaticSegment(text))

    return tuple(segments)


def parse(template: str) -> Pattern:
    """Compile a path template into a :class:`.Pattern`.

    Args:
        template (str): The path template to compile.

    Returns:
        Pattern: The compiled pattern.

    Raises:
        PatternSyntaxError: The template is malformed.
    """

    return Pattern(parse_segments(template))
