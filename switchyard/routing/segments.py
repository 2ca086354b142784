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

"""Segment types that make up a compiled path pattern.

A pattern is an ordered sequence of two kinds of segments:

* :class:`StaticSegment` for literal text, and
* :class:`ParameterSegment` for a named value captured from the path.

Both are immutable. Code that consumes segments (regex synthesis, path
rendering and template rendering) dispatches on the segment type.
"""

from __future__ import annotations

from typing import NamedTuple, Optional, Union

from switchyard import constants

__all__ = (
    'ParameterSegment',
    'Segment',
    'StaticSegment',
)


class StaticSegment(NamedTuple):
    """Literal text within a path.

    Attributes:
        text (str): The literal text.
        required (bool): When ``False``, the text (and anything after
            it) may be omitted from the end of a matching path, and is
            dropped from the end of a rendered path.
    """

    text: str
    required: bool = True

    def optional(self) -> StaticSegment:
        return self._replace(required=False)

    def as_template(self) -> str:
        return self.text


class ParameterSegment(NamedTuple):
    """A named value within a path.

    Attributes:
        name (str): Parameter name.
        required (bool): When ``False``, the parameter may bind to the end
            of the path, in which case it is absent from the match.
        allow_slashes (bool): Whether the value may contain ``/``.
        value_pattern (str): A regular expression that overrides the
            default value-matching rule, or ``None``.
    """

    name: str
    required: bool = True
    allow_slashes: bool = False
    value_pattern: Optional[str] = None

    def optional(self) -> ParameterSegment:
        return self._replace(required=False)

    @property
    def marker(self) -> str:
        if self.allow_slashes:
            return constants.SLASH_PARAMETER_MARKER

        return constants.PARAMETER_MARKER

    def as_template(self) -> str:
        return self.marker + self.name


Segment = Union[StaticSegment, ParameterSegment]
