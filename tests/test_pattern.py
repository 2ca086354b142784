import re
from threading import Barrier
from threading import Thread
from time import sleep
from unittest.mock import MagicMock

import pytest

import switchyard
from switchyard.routing import parse
from switchyard.routing import ParameterSegment
from switchyard.routing import Pattern
from switchyard.routing import StaticSegment
from switchyard.routing import pattern as pattern_module
from switchyard.routing.matcher import segments_to_regex


@pytest.mark.parametrize(
    'template, path, expected',
    [
        ('/about', '/about', {}),
        ('/about', '/about/', None),
        ('/about', '/about/us', None),
        ('/about', '/abou', None),
        ('/about/', '/about', {}),
        ('/about/', '/about/', {}),
        ('/about/', '/about//', None),
        ('', '', {}),
        ('', '/', None),
        ('/users/:id', '/users/42', {'id': '42'}),
        ('/users/:id', '/users/', None),
        ('/users/:id', '/users/42/', None),
        ('/users/:id', '/users/42/x', None),
        ('/files/*path', '/files/a/b/c.txt', {'path': 'a/b/c.txt'}),
        ('/files/*path', '/files/', None),
        ('/lectures/:id.:format', '/lectures/7.json', {'id': '7', 'format': 'json'}),
        (':controller/:action', 'lecture/show', {'controller': 'lecture', 'action': 'show'}),
    ],
)
def test_match(template, path, expected):
    assert parse(template).match(path) == expected


@pytest.mark.parametrize(
    'path, expected',
    [
        ('/a.b(c)/1', {'x': '1'}),
        ('/aXb(c)/1', None),
        ('/a.bc/1', None),
    ],
)
def test_match_escapes_metacharacters(path, expected):
    assert parse('/a.b(c)/:x').match(path) == expected


def test_regex_is_anchored_at_the_end():
    source = segments_to_regex(parse('/users/:id').segments)

    assert source == r'^/users(?:/|\Z)(?P<p0>[^/]+)\Z'
    assert parse('/about').match('/about\n') is None
    assert parse('/about/').match('/about/\n') is None


def test_path_parameter_stops_before_trailing_slash():
    pattern = parse('/files/*path/')

    assert segments_to_regex(pattern.segments) == (
        r'^/files(?:/|\Z)(?P<p0>.+?)(?:/|\Z)\Z'
    )
    assert pattern.match('/files/a/b/') == {'path': 'a/b'}
    assert pattern.match('/files/a/b') == {'path': 'a/b'}
    assert parse('/files/*path.:format').match('/files/a.b.c') == {
        'path': 'a.b',
        'format': 'c',
    }


def test_optional_parameter():
    pattern = parse('/lectures/:id/:action').with_options({'action'})

    assert pattern.match('/lectures/1/edit') == {'id': '1', 'action': 'edit'}
    assert pattern.match('/lectures/1/') == {'id': '1'}
    assert pattern.match('/lectures/1') == {'id': '1'}
    assert pattern.match('/lectures/') is None


def test_optional_static_segment():
    pattern = Pattern([StaticSegment('/a'), StaticSegment('/b', required=False)])

    assert pattern.match('/a') == {}
    assert pattern.match('/a/b') == {}
    assert pattern.match('/a/c') is None


def test_value_patterns():
    pattern = parse('/users/:id').with_options(value_patterns={'id': '[0-9]+'})

    assert pattern.match('/users/42') == {'id': '42'}
    assert pattern.match('/users/abc') is None
    assert pattern.segments[1].value_pattern == '[0-9]+'


def test_invalid_value_pattern():
    pattern = parse('/users/:id').with_options(value_patterns={'id': '('})

    with pytest.raises(switchyard.PatternSyntaxError):
        pattern.match('/users/1')


def test_with_options_returns_copy():
    pattern = parse('/users/:id')
    optional = pattern.with_options({'id'})

    assert pattern.segments[1].required
    assert not optional.segments[1].required
    assert optional.with_options(()).segments[1].required is False


class TestComposition:
    def test_append(self):
        users = parse('/users/')
        user = users.append(':id')

        assert user.template == '/users/:id'
        assert users.template == '/users/'

    def test_append_pattern(self):
        pattern = parse('/users/').append(parse(':id/avatar'))

        assert pattern.segments == (
            StaticSegment('/users/'),
            ParameterSegment('id'),
            StaticSegment('/avatar'),
        )

    def test_append_static_merges_literals(self):
        pattern = parse('/a').append_static('/b').append('/c')

        assert pattern.segments == (StaticSegment('/a/b/c'),)

    def test_append_parameter(self):
        pattern = parse('/files/').append_parameter('path', allow_slashes=True)

        assert pattern.template == '/files/*path'
        assert pattern.match('/files/x/y') == {'path': 'x/y'}

    def test_append_to_empty(self):
        assert Pattern().append('/users').segments == (StaticSegment('/users'),)
        assert Pattern().append('').segments == (StaticSegment(''),)

    def test_append_duplicate_name(self):
        with pytest.raises(switchyard.PatternSyntaxError):
            parse('/:id').append('/:id')

    def test_optional_literal_is_not_merged(self):
        pattern = Pattern([StaticSegment('/a'), StaticSegment('/b', required=False)])
        pattern = pattern.append_static('/c')

        assert pattern.segments == (
            StaticSegment('/a'),
            StaticSegment('/b', required=False),
            StaticSegment('/c'),
        )


class TestApply:
    def test_apply(self):
        pattern = parse('/lectures/:id/:action').apply({'action': 'edit'})

        assert pattern.template == '/lectures/:id/edit'
        assert pattern.segments[-1] == StaticSegment('/edit')
        assert pattern.parameter_names == frozenset(['id'])

    def test_apply_static_value(self):
        pattern = parse('/lectures/:id/:action').apply(
            {'action': 'show'}, {'action': 'show'}
        )

        assert pattern.segments[-1] == StaticSegment('show', required=False)
        assert pattern.match('/lectures/1/show') == {'id': '1'}
        assert pattern.match('/lectures/1/') == {'id': '1'}
        assert pattern.match('/lectures/1') == {'id': '1'}
        assert pattern.match('/lectures/1/edit') is None

    def test_apply_value_differs_from_static_value(self):
        pattern = parse('before/:parameter/').apply(
            {'parameter': 'value('}, {'parameter': 'value('}
        )

        assert pattern.match('before/value(/') == {}
        assert pattern.match('before/') == {}
        assert pattern.match('before') == {}
        assert pattern.match('before/value/') is None

    def test_apply_ignores_none(self):
        pattern = parse('/:a/:b').apply({'a': 1, 'b': None})

        assert pattern.template == '/1/:b'


def test_equality_and_hash():
    assert parse('/a/:b') == parse('/a/:b')
    assert parse('/a/:b') != parse('/a/*b')
    assert len({parse('/a/:b'), parse('/a/:b')}) == 1
    assert parse('/a') != '/a'


def test_iteration():
    pattern = parse('/users/:id')

    assert list(pattern) == list(pattern.segments)
    assert len(pattern) == 2
    assert repr(pattern) == "<Pattern: '/users/:id'>"


def test_build_path():
    assert parse('/users/:id').build_path({'id': 42}) == '/users/42'

    with pytest.raises(switchyard.MissingParameterValue) as excinfo:
        parse('/users/:id').build_path()

    assert excinfo.value.name == 'id'


def test_compile_once():
    pattern = parse('/users/:id')

    regex = pattern.compile()

    assert isinstance(regex, re.Pattern)
    assert pattern.compile() is regex
    assert pattern.regex is regex


def test_multithread_compile(monkeypatch):
    compile_segments = pattern_module.compile_segments

    def side_effect(segments):
        sleep(0.05)
        return compile_segments(segments)

    mock = MagicMock(side_effect=side_effect)
    monkeypatch.setattr(pattern_module, 'compile_segments', mock)

    pattern = parse('/foo/:id')

    calls = 0
    num_threads = 3
    barrier = Barrier(num_threads)

    def match():
        nonlocal calls
        barrier.wait()
        assert pattern.match('/foo/1') == {'id': '1'}
        calls += 1

    threads = [Thread(target=match) for i in range(num_threads)]
    for t in threads:
        t.start()

    for t in threads:
        t.join()

    assert calls == num_threads
    assert mock.call_count == 1
