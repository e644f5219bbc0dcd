"""Shared fixtures for toml-env tests."""

from toml_env.testing.pytest_fixtures import config_dir, env_vars, environment  # noqa: F401
