"""Tests for hosts.toml rendering."""

from registrymirror.domain import MirrorEndpoint
from registrymirror.hosts import render_hosts_file, server_for, DEFAULT_SERVER_OVERRIDES
from registrymirror.validation import validate_registry_url


class TestRenderHostsFile:
    """Tests for render_hosts_file."""

    def test_single_mirror(self):
        registry = validate_registry_url("https://example.com")
        content = render_hosts_file(registry, ["http://127.0.0.1:5000"])
        expected = '''server = "https://example.com"

[host."http://127.0.0.1:5000"]
  capabilities = ["pull", "resolve"]
[host."http://127.0.0.1:5000".header]
  X-Spegel-Registry = ["https://example.com"]
  X-Spegel-Mirror = ["true"]'''
        assert content == expected

    def test_multiple_mirrors(self):
        """Test that only mirrors after the first are tagged external."""
        registry = validate_registry_url("https://example.com")
        content = render_hosts_file(registry, ["http://127.0.0.1:5000", "http://127.0.0.1:5001"])
        expected = '''server = "https://example.com"

[host."http://127.0.0.1:5000"]
  capabilities = ["pull", "resolve"]
[host."http://127.0.0.1:5000".header]
  X-Spegel-Registry = ["https://example.com"]
  X-Spegel-Mirror = ["true"]

[host."http://127.0.0.1:5001"]
  capabilities = ["pull", "resolve"]
[host."http://127.0.0.1:5001".header]
  X-Spegel-Registry = ["https://example.com"]
  X-Spegel-Mirror = ["true"]
  X-Spegel-External = ["true"]'''
        assert content == expected

    def test_docker_override(self):
        """Test docker.io is served from registry-1 but still tagged as docker.io."""
        registry = validate_registry_url("https://docker.io")
        content = render_hosts_file(registry, ["http://127.0.0.1:5000"])
        expected = '''server = "https://registry-1.docker.io"

[host."http://127.0.0.1:5000"]
  capabilities = ["pull", "resolve"]
[host."http://127.0.0.1:5000".header]
  X-Spegel-Registry = ["https://docker.io"]
  X-Spegel-Mirror = ["true"]'''
        assert content == expected

    def test_duplicate_mirrors_rendered_separately(self):
        registry = validate_registry_url("https://example.com")
        content = render_hosts_file(registry, ["http://127.0.0.1:5000", "http://127.0.0.1:5000"])
        assert content.count('[host."http://127.0.0.1:5000"]') == 2
        assert content.count('X-Spegel-External') == 1

    def test_no_mirrors(self):
        registry = validate_registry_url("https://example.com")
        assert render_hosts_file(registry, []) == 'server = "https://example.com"'

    def test_no_trailing_newline(self):
        registry = validate_registry_url("https://example.com")
        assert not render_hosts_file(registry, ["http://127.0.0.1:5000"]).endswith('\n')

    def test_accepts_mirror_endpoints(self):
        """Test that position, not a passed-in flag, decides the external tag."""
        registry = validate_registry_url("https://example.com")
        mirrors = [MirrorEndpoint("http://a:5000", is_external=True), MirrorEndpoint("http://b:5000")]
        content = render_hosts_file(registry, mirrors)
        first, second = content.split('\n\n')[1:]
        assert 'X-Spegel-External' not in first
        assert 'X-Spegel-External = ["true"]' in second


class TestServerOverrides:
    """Tests for the server override table."""

    def test_default_table(self):
        assert DEFAULT_SERVER_OVERRIDES == {'docker.io': 'https://registry-1.docker.io'}

    def test_custom_table(self):
        registry = validate_registry_url("https://quay.io")
        overrides = {'quay.io': 'https://cdn.quay.io'}
        content = render_hosts_file(registry, ["http://127.0.0.1:5000"], overrides)
        assert content.startswith('server = "https://cdn.quay.io"\n')
        assert 'X-Spegel-Registry = ["https://quay.io"]' in content

    def test_custom_table_replaces_default(self):
        registry = validate_registry_url("https://docker.io")
        assert server_for(registry, {}) == "https://docker.io"

    def test_override_matches_host_with_port_only_exactly(self):
        registry = validate_registry_url("https://docker.io:443")
        assert server_for(registry) == "https://docker.io:443"


class TestMirrorEndpoint:
    """Tests for MirrorEndpoint.from_urls."""

    def test_first_is_primary(self):
        endpoints = MirrorEndpoint.from_urls(["http://a", "http://b", "http://c"])
        assert [e.is_external for e in endpoints] == [False, True, True]
        assert [str(e) for e in endpoints] == ["http://a", "http://b", "http://c"]

    def test_empty(self):
        assert MirrorEndpoint.from_urls([]) == []
