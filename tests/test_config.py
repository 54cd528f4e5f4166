"""Test configuration resolution."""

import pytest

from docs_search.config import (
    DEFAULT_VERSION,
    SERVER_VERSION,
    bundled_docs_path,
    resolve_config,
)
from docs_search.core.exceptions import ConfigurationError, DocsPathNotFound


@pytest.fixture
def base_dir(tmp_path):
    """Package base directory with bundled v8 and v9 docs."""
    (tmp_path / "docs" / "v9").mkdir(parents=True, exist_ok=True)
    (tmp_path / "docs" / "v8").mkdir(parents=True, exist_ok=True)
    return tmp_path


class TestResolveConfig:
    """Test argument and environment precedence."""

    def test_defaults(self, base_dir):
        """Test the default version and bundled docs."""
        config = resolve_config([], environ={}, base_dir=base_dir)

        assert config.version == DEFAULT_VERSION == "v9"
        assert config.docs_path == base_dir / "docs" / "v9"
        assert config.server_name == "docs-search-v9"
        assert config.server_version == SERVER_VERSION
        assert config.log_level == "INFO"

    def test_version_argument(self, base_dir):
        """Test the positional version selects bundled docs."""
        config = resolve_config(["v8"], environ={"DOCS_SEARCH_VERSION": "v9"}, base_dir=base_dir)

        assert config.version == "v8"
        assert config.docs_path == bundled_docs_path("v8", base_dir)

    def test_version_environment(self, base_dir):
        """Test the version environment variable."""
        config = resolve_config([], environ={"DOCS_SEARCH_VERSION": "v8"}, base_dir=base_dir)

        assert config.version == "v8"
        assert config.server_name == "docs-search-v8"

    def test_docs_path_environment(self, base_dir, docs_root):
        """Test an explicit docs path overrides bundled docs."""
        config = resolve_config([], environ={"DOCS_SEARCH_PATH": str(docs_root)}, base_dir=base_dir)

        assert config.docs_path == docs_root.resolve()

    def test_docs_path_option_wins(self, base_dir, docs_root):
        """Test --docs-path takes precedence over the environment."""
        config = resolve_config(
            ["--docs-path", str(docs_root)],
            environ={"DOCS_SEARCH_PATH": str(base_dir / "nowhere")},
            base_dir=base_dir,
        )

        assert config.docs_path == docs_root.resolve()

    def test_missing_docs(self, base_dir):
        """Test a version without docs fails with guidance."""
        with pytest.raises(DocsPathNotFound) as exc_info:
            resolve_config(["v7"], environ={}, base_dir=base_dir)

        message = str(exc_info.value)
        assert 'version "v7"' in message
        assert "DOCS_SEARCH_PATH" in message

    def test_log_level(self, base_dir):
        """Test log levels are normalized to upper case."""
        assert resolve_config(["--log-level", "debug"], environ={}, base_dir=base_dir).log_level == "DEBUG"
        assert resolve_config([], environ={"DOCS_SEARCH_LOG_LEVEL": "warning"}, base_dir=base_dir).log_level == \
            "WARNING"

    def test_invalid_log_level(self, base_dir):
        """Test unknown log levels are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown log level: LOUD"):
            resolve_config(["--log-level", "loud"], environ={}, base_dir=base_dir)
