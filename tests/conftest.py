"""
Shared pytest fixtures for the tfsnip test suite.

Source builders live in tests/factories.py; the fixtures here wire them to
temporary directories and keep the real user configuration out of the way.

Usage in tests:
    def test_something(go_factory, example_source):
        unit = go_factory.parse(example_source)

    def test_cli(provider_tree):
        source_root, provider_dir = provider_tree
"""

import pytest

from tfsnip.config import ConfigManager

from tests.factories import EXAMPLE_THING, MIXED_FIELDS, GoSourceFactory


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the real ~/.tfsnip and TFSNIP_* variables out of every test."""
    monkeypatch.setattr(ConfigManager, "USER_CONFIG_DIR", tmp_path / "home" / ".tfsnip")
    for var in ("TFSNIP_EDITOR", "TFSNIP_TEMPLATE_DIR", "TFSNIP_PROVIDERS_DIR",
                "TFSNIP_PROJECT_PATH", "TFSNIP_UNICODE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TFSNIP_ASCII_ONLY", "1")


@pytest.fixture
def go_factory(tmp_path):
    """GoSourceFactory rooted in a temp directory."""
    return GoSourceFactory(tmp_path / "src")


@pytest.fixture
def example_source():
    return EXAMPLE_THING


@pytest.fixture
def mixed_source():
    return MIXED_FIELDS


@pytest.fixture
def provider_tree(tmp_path, go_factory):
    """
    A Terraform source root with one provider, "example":

        <root>/builtin/providers/example/
            resource_example_thing.go
            resource_example_mixed.go
            resource_example_thing_test.go   (ignored)
            provider.go                      (ignored)

    Returns:
        (source_root, provider_dir)
    """
    source_root = tmp_path / "terraform"
    provider_dir = source_root / "builtin" / "providers" / "example"
    go_factory.write("resource_example_thing.go", EXAMPLE_THING, provider_dir)
    go_factory.write("resource_example_mixed.go", MIXED_FIELDS, provider_dir)
    go_factory.write(
        "resource_example_thing_test.go",
        "package example\n\nfunc TestThing() {}\n",
        provider_dir,
    )
    go_factory.write("provider.go", "package example\n", provider_dir)
    return source_root, provider_dir
