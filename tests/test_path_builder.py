import pytest

import switchyard
from switchyard.routing import build_path
from switchyard.routing import parse
from switchyard.routing import ParameterSegment
from switchyard.routing import StaticSegment
from switchyard.routing.builder import resolve_value


def segments(template):
    return parse(template).segments


@pytest.mark.parametrize(
    'template, params, expected',
    [
        ('', {}, ''),
        ('/', {}, '/'),
        ('/about', {}, '/about'),
        ('/users/:id', {'id': 42}, '/users/42'),
        ('/files/*path', {'path': 'a/b.txt'}, '/files/a/b.txt'),
        ('/lectures/:id.:format', {'id': 7, 'format': 'json'}, '/lectures/7.json'),
    ],
)
def test_build_path(template, params, expected):
    assert build_path(segments(template), params) == expected


@pytest.mark.parametrize(
    'params, static_params, context_params, expected',
    [
        ({'a': 1}, {'a': 2}, {'a': 3}, '/1'),
        ({}, {'a': 2}, {'a': 3}, '/2'),
        ({}, {}, {'a': 3}, '/3'),
        ({'a': None}, {'a': None}, {'a': 3}, '/3'),
    ],
)
def test_value_precedence(params, static_params, context_params, expected):
    result = build_path(segments('/:a'), params, static_params, context_params)

    assert result == expected


def test_resolve_value():
    assert resolve_value('a', {}, {'a': 0}, {'a': 1}) == 0
    assert resolve_value('a', {}, {}, {}) is None


def test_missing_value():
    with pytest.raises(switchyard.MissingParameterValue) as excinfo:
        build_path(segments('/users/:id/:action'), {'id': 1})

    assert excinfo.value.name == 'action'
    assert str(excinfo.value) == 'No value for [action]'
    assert isinstance(excinfo.value, KeyError)


def test_required_parameter_equal_to_static_value():
    result = build_path(
        segments('/lectures/:id/:action'), {'id': 1}, {'action': 'show'}
    )

    assert result == '/lectures/1/show'


def test_trailing_optional_parameter_equal_to_static_value():
    pattern = parse('/lectures/:id/:action').with_options({'action'})

    assert pattern.build_path({'id': 1}, {'action': 'show'}) == '/lectures/1/'
    assert pattern.build_path({'id': 1, 'action': 'show'}, {'action': 'show'}) == (
        '/lectures/1/'
    )
    assert pattern.build_path({'id': 1, 'action': 'edit'}, {'action': 'show'}) == (
        '/lectures/1/edit'
    )


def test_optional_parameter_followed_by_required_text():
    pattern = parse('/:lang/about').with_options({'lang'})

    assert pattern.build_path(static_params={'lang': 'en'}) == '/en/about'


def test_optional_parameter_without_static_value():
    pattern = parse('/lectures/:id/:action').with_options({'action'})

    assert pattern.build_path({'id': 1}, context_params={'action': 'show'}) == (
        '/lectures/1/show'
    )


def test_static_value_compared_as_string():
    pattern = parse('/pages/:page').with_options({'page'})

    assert pattern.build_path({'page': 1}, {'page': '1'}) == '/pages/'


def test_optional_static_segments():
    trailing = [StaticSegment('/a'), StaticSegment('/b', required=False)]
    middle = trailing + [StaticSegment('/c')]

    assert build_path(trailing) == '/a'
    assert build_path(middle) == '/a/b/c'


def test_only_optional_segments():
    optional = [
        StaticSegment('/index', required=False),
        ParameterSegment('format', required=False),
    ]

    assert build_path(optional, static_params={'format': 'html'}) == ''
    assert build_path(optional, {'format': 'json'}, {'format': 'html'}) == '/indexjson'
