"""
Pytest configuration and shared fixtures for all tests.
"""
import io

import pytest
from flask import Flask

from output_target import (
    RequestContext,
    StaticCapabilityProvider,
    init_output_target,
    reset_context,
)
from output_target import config


@pytest.fixture(autouse=True)
def clean_context():
    """Make sure no test sees a context bound by a previous one."""
    reset_context()
    yield
    reset_context()


@pytest.fixture
def capabilities():
    """Capability provider for the test app; not mobile unless a test flips it."""
    return StaticCapabilityProvider(mobile=False)


@pytest.fixture
def app(capabilities):
    """Create application for testing."""
    app = Flask(__name__)
    app.config.update({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
    })
    init_output_target(app, capabilities=capabilities, config_class=config.TestingConfig)

    @app.route('/hello')
    def hello():
        return 'hello'

    @app.route('/page')
    def page():
        return '<html><body>' + ('output target ' * 200) + '</body></html>'

    @app.route('/target')
    def target():
        from output_target import detect_output_target
        return detect_output_target().value

    @app.route('/template')
    def template():
        from flask import render_template_string
        return render_template_string(
            '{{ output_target }}|{{ is_ajax() }}|{{ is_browser() }}|{{ is_mobile() }}'
        )

    @app.route('/empty')
    def empty():
        return '', 204

    @app.route('/stream')
    def stream():
        def generate():
            yield 'chunk-1'
            yield 'chunk-2'
        return app.response_class(generate())

    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def console_stream(tmp_path):
    """An open file, which has a real file descriptor like a terminal stdout."""
    with open(tmp_path / 'stdout.log', 'w') as stream:
        yield stream


@pytest.fixture
def browser_context():
    return RequestContext(headers={'Accept-Encoding': 'gzip, deflate'})


@pytest.fixture
def ajax_context():
    return RequestContext(headers={
        'X-Requested-With': 'XMLHttpRequest',
        'Accept-Encoding': 'gzip, deflate',
    })


@pytest.fixture
def mobile_context():
    return RequestContext(
        headers={'Accept-Encoding': 'gzip, deflate'},
        capabilities=StaticCapabilityProvider(mobile=True),
    )


@pytest.fixture
def memory_stream():
    """An in-memory stream: looks like a stream but has no file descriptor."""
    return io.StringIO()
