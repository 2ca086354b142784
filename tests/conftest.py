import logging

import pytest

import switchyard


def make_lecture_table(**options):
    builder = switchyard.RouteTableBuilder()
    builder.match('/', name='home', static_params={'controller': 'home'})
    builder.resources('lecture', '/lectures')

    return builder.build(switchyard.RouteTableOptions(**options))


@pytest.fixture
def lecture_table():
    return make_lecture_table()


@pytest.fixture
def instructor_route():
    route = switchyard.Route(
        '/instructor/lectures/:id/:action',
        static_params={'controller': 'instructorLecture', 'action': 'show'},
        name='instructor_lecture',
    )
    return route.prepare()


@pytest.fixture
def restore_logger():
    logger = logging.getLogger('switchyard')
    handlers = list(logger.handlers)
    level = logger.level

    yield logger

    logger.handlers[:] = handlers
    logger.setLevel(level)
