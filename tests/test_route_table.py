import logging

import pytest

import switchyard
from switchyard import Route
from switchyard import RouteMatch
from switchyard import RouteTable
from switchyard import RouteTableOptions


@pytest.fixture
def table():
    return RouteTable(
        [
            Route('/', static_params={'controller': 'home'}, name='home'),
            Route(
                '/lectures/:id/:action',
                static_params={'controller': 'lecture', 'action': 'show'},
                value_patterns={'id': '[0-9]+'},
                name='lecture',
            ),
            Route(
                '/lectures/:action',
                static_params={'controller': 'lecture', 'action': 'index'},
                default_static_params={'action': 'index'},
                name='lectures',
            ),
            Route(
                '/:controller/:action',
                static_params={'action': 'index'},
                methods='GET',
            ),
        ]
    )


class TestMatchForward:
    def test_first_match_wins(self, table):
        match = table.match_forward('GET', '/lectures/3/edit')

        assert match == RouteMatch(
            table.routes[1], {'controller': 'lecture', 'action': 'edit', 'id': '3'}
        )
        assert match.route.name == 'lecture'

    def test_later_route(self, table):
        match = table.match_forward('GET', '/lectures/search')

        assert match.route is table.routes[2]
        assert match.parameters == {'controller': 'lecture', 'action': 'search'}

    def test_fallback_route(self, table):
        match = table.match_forward('GET', '/courses')

        assert match.route is table.routes[3]
        assert match.parameters == {'controller': 'courses', 'action': 'index'}

    def test_no_match(self, table):
        assert table.match_forward('POST', '/courses') is None
        assert table.match_forward('GET', '/a/b/c') is None

    def test_root(self, table):
        assert table.match_forward('GET', '').route.name == 'home'
        assert table.match_forward('GET', '/').route.name == 'home'


class TestMatchReverse:
    def test_best_score_wins(self, table):
        params = {'controller': 'lecture', 'action': 'edit', 'id': 3}

        assert table.match_reverse(params) is table.routes[1]

    def test_optional_static(self, table):
        assert table.match_reverse({'controller': 'lecture'}) is table.routes[2]

    def test_context_params(self, table):
        route = table.match_reverse({'action': 'edit'}, {'controller': 'courses'})

        assert route is table.routes[3]

    def test_tie_keeps_first_route(self):
        first = Route('/a', static_params={'page': 'a'})
        second = Route('/b', static_params={'page': 'a'})
        table = RouteTable([first, second])

        assert first.match_reverse({'page': 'a'}) == second.match_reverse({'page': 'a'})
        assert table.match_reverse({'page': 'a'}) is first

    def test_zero_score_never_wins(self):
        table = RouteTable([Route('/about')])

        assert Route('/about').prepare().match_reverse({}) == 0
        assert table.match_reverse({}) is None

    def test_no_match(self, table):
        assert table.match_reverse({'id': 3}) is None
        assert table.match_reverse({}) is None


class TestBuildPath:
    def test_by_name(self, table):
        assert table.build_path_by_name('home') == '/'
        assert table.build_path_by_name('lecture', {'id': 3}) == '/lectures/3/'
        assert table.build_path_by_name('lecture', {'id': 3, 'action': 'edit'}) == (
            '/lectures/3/edit'
        )
        assert table.build_path_by_name('lectures') == '/lectures/'

    def test_unknown_name(self, table):
        with pytest.raises(switchyard.NoSuchRoute) as excinfo:
            table.build_path_by_name('nope')

        assert excinfo.value.name == 'nope'
        assert isinstance(excinfo.value, LookupError)

    def test_missing_value(self, table):
        with pytest.raises(switchyard.MissingParameterValue):
            table.build_path_by_name('lecture')

    def test_by_match(self, table):
        params = {'controller': 'lecture', 'action': 'edit', 'id': 3}

        assert table.build_path_by_match(params) == '/lectures/3/edit'
        assert table.build_path_by_match({'controller': 'lecture'}) == '/lectures/'
        assert table.build_path_by_match(
            {'controller': 'lecture', 'action': 'search'}
        ) == '/lectures/search'

    def test_by_match_with_context(self, table):
        path = table.build_path_by_match({'action': 'new'}, {'controller': 'courses'})

        assert path == '/courses/new'

    def test_no_route_matches(self, table):
        with pytest.raises(switchyard.NoRouteMatchesParameters) as excinfo:
            table.build_path_by_match({'id': 3})

        assert excinfo.value.params == {'id': 3}
        assert str(excinfo.value) == 'No route matches parameters [id]'


class TestContextParameters:
    def test_default_names(self, table):
        match = table.match_forward('GET', '/lectures/3/edit')

        assert table.context_parameters(match) == {'controller': 'lecture'}

    def test_custom_names(self):
        options = RouteTableOptions(context_parameter_names=['controller', 'lang'])
        table = RouteTable(
            [Route('/:lang/:controller/:action', static_params={'action': 'index'})],
            options=options,
        )

        match = table.match_forward('GET', '/en/lectures/show')

        assert table.context_parameters(match) == {
            'controller': 'lectures',
            'lang': 'en',
        }

    def test_link_from_match(self, table):
        match = table.match_forward('GET', '/lectures/3/edit')
        context = table.context_parameters(match)

        assert table.build_path_by_match({'action': 'search'}, context) == (
            '/lectures/search'
        )


class TestConstruction:
    def test_duplicate_names(self):
        routes = [Route('/a', name='a'), Route('/b', name='a')]

        with pytest.raises(switchyard.DuplicateRouteNameError):
            RouteTable(routes)

    def test_routes_are_prepared(self):
        route = Route('/a')
        RouteTable([route])

        assert route.is_prepared

    def test_eager_compile(self, table):
        assert all(route.pattern._regex is not None for route in table)

    def test_lazy_compile(self):
        table = RouteTable(
            [Route('/a'), Route('/b')], options=RouteTableOptions(eager_compile=False)
        )

        assert all(route.pattern._regex is None for route in table)
        assert table.match_forward('GET', '/a').route is table.routes[0]
        assert table.routes[0].pattern._regex is not None
        assert table.routes[1].pattern._regex is None

    def test_invalid_value_pattern_fails_fast(self):
        route = Route('/a/:id')
        route.pattern = route.pattern.with_options(value_patterns={'id': '('})

        with pytest.raises(switchyard.PatternSyntaxError):
            RouteTable([route])

    def test_collection(self, table):
        assert len(table) == 4
        assert list(table) == list(table.routes)
        assert set(table.named_routes) == {'home', 'lecture', 'lectures'}
        assert table.get_named_route('lecture') is table.routes[1]
        assert table.get_named_route('nope') is None
        assert repr(table) == '<RouteTable: 4 routes>'

    def test_named_routes_read_only(self, table):
        with pytest.raises(TypeError):
            table.named_routes['other'] = Route('/other')

    def test_default_options(self):
        options = RouteTableOptions()

        assert options.context_parameter_names == frozenset(['controller'])
        assert options.eager_compile is True


def test_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger='switchyard'):
        table = RouteTable([Route('/a', name='a'), Route('/b')])
        table.match_forward('GET', '/c')

    messages = [record.getMessage() for record in caplog.records]

    assert 'Assembled route table with 2 routes (1 named)' in messages
    assert "No route matches GET '/c'" in messages
