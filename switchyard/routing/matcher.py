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

"""Regular expression synthesis and parameter extraction for patterns."""

from __future__ import annotations

import re
from typing import Dict, Optional, Sequence

from switchyard import constants
from switchyard.errors import PatternSyntaxError
from switchyard.routing.segments import ParameterSegment
from switchyard.routing.segments import Segment
from switchyard.routing.segments import StaticSegment

__all__ = (
    'compile_segments',
    'match_segments',
    'segments_to_regex',
)

_GROUP_NAME_TEMPLATE = 'p{0}'

# NOTE: '$' would also match before a trailing newline, so '/about' would
#   accept '/about\n'. Parameter values are not restricted this way.
_END = r'\Z'


def _static_to_regex(segment: StaticSegment) -> str:
    text = segment.text

    # NOTE: A literal that ends with a slash also matches when the path
    #   stops right before that slash.
    if text.endswith('/'):
        pattern_text = re.escape(text[:-1]) + '(?:/|' + _END + ')'
    else:
        pattern_text = re.escape(text)

    # NOTE: Applying a parameter's static value leaves an optional literal
    #   that may be followed by required ones, as in 'before/value/'. The
    #   path may still end where such a literal would begin.
    if not segment.required:
        pattern_text = '(?:' + pattern_text + '|' + _END + ')'

    return pattern_text


def _parameter_to_regex(
    segment: ParameterSegment, position: int, lazy: bool = False
) -> str:
    if segment.value_pattern is not None:
        body = segment.value_pattern
    elif segment.allow_slashes:
        body = constants.PATH_VALUE_PATTERN

        # NOTE: A greedy body would consume the slash of a following
        #   literal that ends with one, leaving that literal to match
        #   the end of the path instead.
        if lazy:
            body += '?'
    else:
        body = constants.SEGMENT_VALUE_PATTERN

    # NOTE: An optional parameter binds to the end of the path rather than
    #   being made optional with '?', so that it still anchors at the end.
    if not segment.required:
        body += '|' + _END

    return '(?P<{0}>{1})'.format(_GROUP_NAME_TEMPLATE.format(position), body)


def segments_to_regex(segments: Sequence[Segment]) -> str:
    """Return the source of the anchored regular expression for `segments`."""

    parts = ['^']
    position = 0

    for index, segment in enumerate(segments):
        if isinstance(segment, StaticSegment):
            parts.append(_static_to_regex(segment))
        else:
            following = segments[index + 1] if index + 1 < len(segments) else None
            lazy = isinstance(following, StaticSegment) and (
                following.text.endswith('/')
            )

            parts.append(_parameter_to_regex(segment, position, lazy))
            position += 1

    parts.append(_END)
    return ''.join(parts)


def compile_segments(segments: Sequence[Segment]) -> re.Pattern[str]:
    """Compile a sequence of segments into a single regular expression.

    Raises:
        PatternSyntaxError: A custom value pattern is not a valid regular
            expression.
    """

    pattern_text = segments_to_regex(segments)

    try:
        return re.compile(pattern_text)
    except re.error as ex:
        raise PatternSyntaxError(
            'Invalid value pattern in {0!r}: {1}'.format(pattern_text, ex)
        ) from ex


def match_segments(
    regex: re.Pattern[str], segments: Sequence[Segment], path: str
) -> Optional[Dict[str, str]]:
    """Match `path` against a compiled pattern.

    Returns:
        dict: Parameter values keyed by name, or ``None`` if the path does
        not match. Parameters that bound to an empty value are omitted.
    """

    match = regex.match(path)
    if match is None:
        return None

    params = {}
    position = 0
    for segment in segments:
        if isinstance(segment, ParameterSegment):
            value = match.group(_GROUP_NAME_TEMPLATE.format(position))
            position += 1

            if value:
                params[segment.name] = value

    return params
