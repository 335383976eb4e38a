"""
Unit tests for registrymirror.config module
"""
import unittest
import tempfile
import os
import shutil
import json
import logging
from pathlib import Path
from unittest.mock import patch

import yaml

from registrymirror.config import (
    load_config,
    save_config,
    get_config_path,
    get_default_config,
    merge_configs,
    apply_env_overrides,
    configure_logging,
)
from registrymirror.exit_codes import ConfigError, CONFIG_ERROR


class TestConfigManagement(unittest.TestCase):
    """Test configuration management functionality"""

    def setUp(self):
        """Set up test environment"""
        self.temp_dir = tempfile.mkdtemp()
        env = {k: v for k, v in os.environ.items() if not k.startswith('REGISTRYMIRROR_')}
        env['HOME'] = self.temp_dir
        self.env_patcher = patch.dict(os.environ, env, clear=True)
        self.env_patcher.start()
        self.config_dir = Path(self.temp_dir) / '.registrymirror'

    def tearDown(self):
        """Clean up test environment"""
        self.env_patcher.stop()
        shutil.rmtree(self.temp_dir)

    def _write(self, filename, content):
        self.config_dir.mkdir(exist_ok=True)
        path = self.config_dir / filename
        path.write_text(content)
        return path

    def test_get_default_config(self):
        """Test default configuration structure"""
        config = get_default_config()

        self.assertEqual(config['containerd']['config_path'], '/etc/containerd/certs.d')
        self.assertEqual(config['registries'], [])
        self.assertEqual(config['mirrors'], [])
        self.assertEqual(config['server_overrides'], {'docker.io': 'https://registry-1.docker.io'})
        self.assertIn('level', config['logging'])
        self.assertIn('format', config['logging'])

    def test_load_config_no_file(self):
        """Test loading config when no file exists"""
        self.assertEqual(load_config(), get_default_config())

    def test_default_config_path(self):
        """Test default path when nothing exists"""
        self.assertEqual(get_config_path(), self.config_dir / 'config.json')

    def test_load_config_json_file(self):
        """Test loading config from JSON file"""
        self._write('config.json', json.dumps({
            'registries': ['https://docker.io'],
            'containerd': {'config_path': '/tmp/certs.d'},
        }))

        config = load_config()
        self.assertEqual(config['registries'], ['https://docker.io'])
        self.assertEqual(config['containerd']['config_path'], '/tmp/certs.d')
        # Defaults still present
        self.assertEqual(config['logging']['level'], 'INFO')

    def test_load_config_toml_file(self):
        """Test loading config from TOML file"""
        self._write('config.toml', '\n'.join([
            'mirrors = ["http://127.0.0.1:5000", "http://127.0.0.1:5001"]',
            '',
            '[containerd]',
            'config_path = "/var/lib/certs.d"',
        ]))

        config = load_config()
        self.assertEqual(config['mirrors'], ['http://127.0.0.1:5000', 'http://127.0.0.1:5001'])
        self.assertEqual(config['containerd']['config_path'], '/var/lib/certs.d')

    def test_load_config_yaml_file(self):
        """Test loading config from YAML file"""
        self._write('config.yaml', yaml.safe_dump({
            'registries': ['https://gcr.io', 'https://ghcr.io'],
            'logging': {'level': 'DEBUG'},
        }))

        config = load_config()
        self.assertEqual(config['registries'], ['https://gcr.io', 'https://ghcr.io'])
        self.assertEqual(config['logging']['level'], 'DEBUG')
        self.assertEqual(config['logging']['format'], '%(levelname)s: %(message)s')

    def test_server_overrides_replaced(self):
        """Test that a configured override table replaces the default one"""
        self._write('config.json', json.dumps({
            'server_overrides': {'quay.io': 'https://cdn.quay.io'},
        }))

        config = load_config()
        self.assertEqual(config['server_overrides'], {'quay.io': 'https://cdn.quay.io'})

    def test_env_config_path(self):
        """Test REGISTRYMIRROR_CONFIG points at a config file"""
        path = Path(self.temp_dir) / 'custom.json'
        path.write_text(json.dumps({'mirrors': ['http://10.0.0.1:5000']}))
        os.environ['REGISTRYMIRROR_CONFIG'] = str(path)

        self.assertEqual(get_config_path(), path)
        self.assertEqual(load_config()['mirrors'], ['http://10.0.0.1:5000'])

    def test_invalid_json_raises(self):
        """Test that a broken config file is a config error"""
        self._write('config.json', '{"registries": [')

        with self.assertRaises(ConfigError) as ctx:
            load_config()
        self.assertEqual(ctx.exception.exit_code, CONFIG_ERROR)

    def test_non_mapping_raises(self):
        """Test that a config file must hold a mapping"""
        self._write('config.yaml', yaml.safe_dump(['https://docker.io', 'https://gcr.io']))

        with self.assertRaises(ConfigError):
            load_config()

    def test_save_config_json(self):
        """Test saving and loading back"""
        config = get_default_config()
        config['registries'] = ['https://docker.io']

        path = save_config(config)
        self.assertEqual(path, self.config_dir / 'config.json')
        self.assertEqual(load_config()['registries'], ['https://docker.io'])


class TestEnvOverrides(unittest.TestCase):
    """Test environment variable overrides"""

    def test_nested_key_with_underscore(self):
        config = get_default_config()
        with patch.dict(os.environ, {'REGISTRYMIRROR_CONTAINERD_CONFIG_PATH': '/opt/certs.d'}):
            config = apply_env_overrides(config)
        self.assertEqual(config['containerd']['config_path'], '/opt/certs.d')

    def test_list_values_are_comma_separated(self):
        config = get_default_config()
        env = {
            'REGISTRYMIRROR_REGISTRIES': 'https://docker.io, https://gcr.io',
            'REGISTRYMIRROR_MIRRORS': 'http://127.0.0.1:5000',
        }
        with patch.dict(os.environ, env):
            config = apply_env_overrides(config)
        self.assertEqual(config['registries'], ['https://docker.io', 'https://gcr.io'])
        self.assertEqual(config['mirrors'], ['http://127.0.0.1:5000'])

    def test_logging_level(self):
        config = get_default_config()
        with patch.dict(os.environ, {'REGISTRYMIRROR_LOGGING_LEVEL': 'debug'}):
            config = apply_env_overrides(config)
        self.assertEqual(config['logging']['level'], 'debug')

    def test_unknown_key_ignored(self):
        config = get_default_config()
        with patch.dict(os.environ, {'REGISTRYMIRROR_NOT_A_KEY': 'x'}):
            config = apply_env_overrides(config)
        self.assertEqual(config, get_default_config())


class TestImportSideEffects(unittest.TestCase):
    """Test that importing the config module leaves logging alone"""

    def test_import_does_not_configure_root_logger(self):
        import importlib
        import registrymirror.config

        root = logging.getLogger()
        saved_handlers = root.handlers[:]
        root.handlers = []
        try:
            importlib.reload(registrymirror.config)
            self.assertEqual(root.handlers, [])
        finally:
            root.handlers = saved_handlers


class TestMergeConfigs(unittest.TestCase):
    """Test recursive merging"""

    def test_nested_merge(self):
        merged = merge_configs({'a': {'b': 1, 'c': 2}}, {'a': {'c': 3}})
        self.assertEqual(merged, {'a': {'b': 1, 'c': 3}})

    def test_lists_replaced(self):
        merged = merge_configs({'mirrors': ['x']}, {'mirrors': ['y', 'z']})
        self.assertEqual(merged['mirrors'], ['y', 'z'])


class TestConfigureLogging(unittest.TestCase):
    """Test logging setup from config"""

    def tearDown(self):
        configure_logging(get_default_config())

    def test_level_from_config(self):
        config = get_default_config()
        config['logging']['level'] = 'warning'
        configure_logging(config)
        self.assertEqual(logging.getLogger().level, logging.WARNING)

    def test_debug_flag_wins(self):
        configure_logging(get_default_config(), debug=True)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)


if __name__ == '__main__':
    unittest.main()
