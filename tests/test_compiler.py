import pytest

import switchyard
from switchyard.routing import parse
from switchyard.routing import parse_segments
from switchyard.routing import ParameterSegment
from switchyard.routing import StaticSegment


@pytest.mark.parametrize(
    'template, expected',
    [
        ('', (StaticSegment(''),)),
        ('/', (StaticSegment('/'),)),
        ('/about', (StaticSegment('/about'),)),
        (
            '/users/:id',
            (StaticSegment('/users/'), ParameterSegment('id')),
        ),
        (
            '/files/*path',
            (StaticSegment('/files/'), ParameterSegment('path', allow_slashes=True)),
        ),
        (
            '/lectures/:id.:format',
            (
                StaticSegment('/lectures/'),
                ParameterSegment('id'),
                StaticSegment('.'),
                ParameterSegment('format'),
            ),
        ),
        (
            ':controller/:action',
            (
                ParameterSegment('controller'),
                StaticSegment('/'),
                ParameterSegment('action'),
            ),
        ),
        (
            '/a:b*c',
            (
                StaticSegment('/a'),
                ParameterSegment('b'),
                ParameterSegment('c', allow_slashes=True),
            ),
        ),
    ],
)
def test_parse_segments(template, expected):
    assert parse_segments(template) == expected


def test_parameter_name_characters():
    segments = parse_segments('/:user_ID2-x')

    assert segments == (
        StaticSegment('/'),
        ParameterSegment('user_ID2'),
        StaticSegment('-x'),
    )


@pytest.mark.parametrize(
    'template',
    [
        '',
        '/',
        '/users/:id',
        '/files/*path',
        '/lectures/:id.:format',
        '/a.b(c)/:x',
    ],
)
def test_template_round_trip(template):
    assert parse(template).template == template
    assert str(parse(template)) == template


def test_display_template():
    pattern = parse('/users/:id/*rest')

    assert pattern.display_template == '/users/${id}/${rest}'
    assert pattern.parameter_names == frozenset(['id', 'rest'])


@pytest.mark.parametrize(
    'template, index, message',
    [
        (':', 0, 'Invalid pattern: expecting name, found end of pattern'),
        ('/a/*', 3, 'Invalid pattern: expecting name, found end of pattern'),
        ('/a/:/b', 3, "Invalid pattern: expecting name, found '/b' at index 3"),
        ('/:-x', 1, "Invalid pattern: expecting name, found '-x' at index 1"),
    ],
)
def test_missing_parameter_name(template, index, message):
    with pytest.raises(switchyard.PatternSyntaxError) as excinfo:
        parse(template)

    assert str(excinfo.value) == message
    assert excinfo.value.template == template
    assert excinfo.value.index == index


def test_duplicate_parameter_name():
    with pytest.raises(switchyard.PatternSyntaxError) as excinfo:
        parse('/:id/*id')

    assert excinfo.value.index == 5
    assert 'was used more than once' in str(excinfo.value)


def test_syntax_error_is_value_error():
    with pytest.raises(ValueError):
        parse('/:')


@pytest.mark.parametrize('template', [None, 42, b'/users'])
def test_template_must_be_str(template):
    with pytest.raises(TypeError):
        parse(template)
