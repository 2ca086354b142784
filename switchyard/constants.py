import os

__all__ = (
    'HTTP_METHODS',
    'WEBDAV_METHODS',
    'COMBINED_METHODS',
    'PARAMETER_MARKER',
    'SLASH_PARAMETER_MARKER',
)

# RFC 7231, 5789 methods
HTTP_METHODS = [
    'CONNECT',
    'DELETE',
    'GET',
    'HEAD',
    'OPTIONS',
    'PATCH',
    'POST',
    'PUT',
    'TRACE',
]

# RFC 2518 and 4918 methods
WEBDAV_METHODS = [
    'CHECKIN',
    'CHECKOUT',
    'COPY',
    'LOCK',
    'MKCOL',
    'MOVE',
    'PROPFIND',
    'PROPPATCH',
    'REPORT',
    'UNCHECKIN',
    'UNLOCK',
    'UPDATE',
    'VERSION-CONTROL',
]

# if SWITCHYARD_CUSTOM_HTTP_METHODS is defined, treat it as a comma-
# delimited string of additional methods that routes may be restricted to.
SWITCHYARD_CUSTOM_HTTP_METHODS = [
    method.strip().upper()
    for method in os.environ.get('SWITCHYARD_CUSTOM_HTTP_METHODS', '').split(',')
    if method.strip() != ''
]

COMBINED_METHODS = HTTP_METHODS + WEBDAV_METHODS + SWITCHYARD_CUSTOM_HTTP_METHODS

# Template markers. A parameter introduced with PARAMETER_MARKER matches a
# single path segment, while SLASH_PARAMETER_MARKER allows the value to
# span several segments.
PARAMETER_MARKER = ':'
SLASH_PARAMETER_MARKER = '*'

# Value patterns used when a parameter does not declare its own.
SEGMENT_VALUE_PATTERN = '[^/]+'
PATH_VALUE_PATTERN = '.+'

DEFAULT_CONTEXT_PARAMETER_NAMES = frozenset(['controller'])
