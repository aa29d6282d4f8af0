"""Pytest configuration and fixtures for normadb tests."""

import pytest


# Markers for test categorization
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that drive the MCP tool layer end to end"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running tests"
    )


@pytest.fixture
def ecommerce_ddl():
    """A small, reasonably normalized e-commerce schema."""
    return """
        CREATE TABLE customers (
            id SERIAL PRIMARY KEY,
            email VARCHAR(255) NOT NULL UNIQUE,
            full_name TEXT NOT NULL
        );

        CREATE TABLE orders (
            id SERIAL PRIMARY KEY,
            customer_id INTEGER NOT NULL REFERENCES customers(id),
            placed_at TIMESTAMP NOT NULL
        );

        CREATE TABLE order_lines (
            order_id INTEGER NOT NULL,
            line_no INTEGER NOT NULL,
            quantity INTEGER NOT NULL,
            PRIMARY KEY (order_id, line_no),
            FOREIGN KEY (order_id) REFERENCES orders(id)
        );
    """


def pytest_collection_modifyitems(config, items):
    """Run integration tests after unit tests."""
    items.sort(key=lambda item: item.get_closest_marker("integration") is not None)
