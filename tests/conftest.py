"""Master test configuration and fixtures.

This is the single source of truth for all test fixtures and configuration.

Organization:
- Pytest hooks (markers from test location)
- Auto-use fixtures (logging, cleanup) - Always run
- Log capture fixtures
- Dependency tree fixtures - components shaped like the ones callers pass
"""

import shutil
import tempfile
from contextlib import suppress
from pathlib import Path

import pytest
from loguru import logger

import rivet.config.logging as logging_config
from rivet import FragmentSpec


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_collection_modifyitems(items):
    """Add markers to tests based on their location."""
    for item in items:
        if "/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


# ============================================================================
# Auto-use Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Set up logging for tests and clean up after.

    This fixture is automatically used in all tests to:
    1. Set up logging to a temporary directory
    2. Reset the global logging configuration
    3. Properly close all file handlers
    """
    temp_dir = tempfile.mkdtemp()
    temp_path = Path(temp_dir)

    handler_id = None
    try:
        logger.remove()
        handler_id = logger.add(
            temp_path / "test.log",
            rotation="1 MB",
            retention=1,
            level="DEBUG",
        )

        yield temp_path

    finally:
        # CRITICAL: Remove loguru handlers FIRST to close file handles
        with suppress(ValueError):
            if handler_id is not None:
                logger.remove(handler_id)
        logger.remove()

        logging_config._config = None
        logging_config.set_debug_enabled(False)
        logging_config._handler_ids.clear()

        shutil.rmtree(temp_dir, ignore_errors=True)


# ============================================================================
# Log Capture Fixtures
# ============================================================================


@pytest.fixture
def log_messages():
    """Capture rivet log records as (level, name, message) tuples."""
    records: list[tuple[str, str, str]] = []

    def sink(message):
        record = message.record
        records.append(
            (
                record["level"].name,
                record["extra"].get("name", ""),
                record["message"],
            )
        )

    handler_id = logger.add(
        sink,
        level="DEBUG",
        filter=lambda record: record["extra"].get("rivet", False),
    )
    yield records
    with suppress(ValueError):
        logger.remove(handler_id)


# ============================================================================
# Dependency Tree Fixtures
# ============================================================================


def make_component(name: str, **spec_fields):
    """Create a component class carrying a fragment spec."""
    component = type(name, (), {})
    component.fragment_spec = FragmentSpec(
        fragment=spec_fields.get("fragment"),
        dependencies=tuple(spec_fields.get("dependencies", ())),
        required_variables=dict(spec_fields.get("required_variables", {})),
    )
    return component


@pytest.fixture
def component_factory():
    """Factory building component classes with a `fragment_spec` attribute."""
    return make_component


@pytest.fixture
def nested_dependencies():
    """Seven components sharing nested dependencies.

    c1 -> (d1, d2), c2 -> d3 -> d4, c3 -> d1, with variables declared at
    several depths.
    """
    d1 = make_component(
        "D1",
        fragment="fragment d1 on Test { test }",
        required_variables={"other": "String!", "foo": "Bar"},
    )
    d2 = make_component("D2", fragment="fragment d2 on Test { test }")
    d4 = make_component(
        "D4",
        fragment="fragment d4 on Test { test }",
        required_variables={"levelThree": "Wow"},
    )
    d3 = make_component(
        "D3", fragment="fragment d3 on Test { test }", dependencies=[d4]
    )

    return [
        {
            "fragment_spec": {
                "fragment": "fragment c1 on Test { test }",
                "dependencies": [d1, d2],
            }
        },
        {
            "fragment_spec": {
                "fragment": "fragment c2 on Test { test }",
                "dependencies": [d3],
                "required_variables": {"productId": "ItemId!", "other": "String!"},
            }
        },
        {
            "fragment_spec": {
                "fragment": "fragment c3 on Test { test }",
                "dependencies": [d1],
                "required_variables": {"other": "String!", "doge": "Wow"},
            }
        },
    ]


@pytest.fixture
def all_variables():
    """Variable values satisfying `nested_dependencies`."""
    return {
        "productId": "test",
        "other": "test",
        "doge": "test",
        "foo": "test",
        "levelThree": "test",
    }
