"""Unit tests for the kvbench command line."""

import json
from pathlib import Path

import pytest

from bench import config as config_module
from bench.config import BenchSettings, get_settings, init_settings
from cli.main import build_options, main


@pytest.fixture(autouse=True)
def settings(monkeypatch):
    """Small value pools and no ambient environment for every CLI run."""
    for name in ("KVBENCH_DEFAULT_ADAPTER", "KVBENCH_PLUGIN_DIR", "KVBENCH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_settings", None)
    return init_settings(value_pool_size=4096)


class TestSettings:
    """Tests for harness settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("KVBENCH_VALUE_POOL_SIZE", raising=False)
        settings = BenchSettings()

        assert settings.default_adapter == "dummy"
        assert settings.plugin_dir is None
        assert settings.value_pool_size == 1024 * 1024

    def test_environment(self, monkeypatch):
        """Test KVBENCH_ prefixed variables override defaults."""
        monkeypatch.setenv("KVBENCH_DEFAULT_ADAPTER", "memory")
        monkeypatch.setenv("KVBENCH_VALUE_POOL_SIZE", "2048")

        settings = BenchSettings()

        assert settings.default_adapter == "memory"
        assert settings.value_pool_size == 2048

    def test_global_instance(self, settings):
        assert get_settings() is settings


class TestBuildOptions:
    """Tests for combining YAML and command-line options."""

    def test_cli_only(self):
        options = build_options(None, ["--num=5"], "memory")

        assert options.adapter == "memory"
        assert options.global_options() == {"num": "5"}

    def test_yaml_with_override(self, tmp_path: Path):
        """Test the command line wins over the config file."""
        path = tmp_path / "bench.yaml"
        path.write_text(
            "adapter: sqlite\n"
            "num: 100\n"
            "workload: [fillseq, ycsbc]\n"
            "sqlite:\n"
            "  path: bench.db\n"
        )

        options = build_options(str(path), ["--num=7"], "dummy")

        assert options.adapter == "sqlite"
        assert options.global_options() == {"num": "7", "workload": "fillseq,ycsbc"}
        assert options.adapter_options() == {"path": "bench.db"}


class TestMain:
    """Tests for the main entry point."""

    def test_run_memory(self, capsys):
        """Test a successful run prints the results table."""
        code = main(["--adapter=memory", "--num=10", "--workload=fillseq,ycsbc"])

        assert code == 0
        out = capsys.readouterr().out
        assert "fillseq" in out
        assert "ycsbc" in out

    def test_json_output(self, capsys):
        """Test --json prints one JSON object per workload on stdout."""
        code = main(["--json", "--adapter=memory", "--num=10", "--threads=2", "--workload=fillseq"])

        assert code == 0
        lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("{")]
        assert json.loads(lines[0])["ops"]["w"] == 20

    def test_default_adapter(self, capsys):
        """Test the settings default adapter is used when none is given."""
        assert main(["--num=5"]) == 0

    def test_list_adapters(self, capsys):
        """Test --list-adapters prints registered names."""
        assert main(["--list-adapters"]) == 0

        names = capsys.readouterr().out.split()
        assert names == ["dummy", "memory", "redis", "sqlite"]

    def test_list_adapters_with_plugins(self, capsys, plugin_dir: Path):
        """Test plugin adapters are listed."""
        (plugin_dir / "extra.py").write_text(
            "from adapters.memory import MemoryAdapter\n"
            "\n"
            "def register_adapters(registry):\n"
            "    registry.register('extra', MemoryAdapter)\n"
        )

        assert main(["--plugin-dir", str(plugin_dir), "--list-adapters"]) == 0
        assert "extra" in capsys.readouterr().out.split()

    def test_unknown_option(self):
        """Test an unknown option is an error exit."""
        assert main(["--adapter=memory", "--bogus=1"]) == 1

    def test_unknown_adapter(self):
        """Test an unknown adapter is an error exit."""
        assert main(["--adapter=nope"]) == 1

    def test_invalid_log_level(self, capsys):
        """Test an unknown log level is an error exit, not a traceback."""
        assert main(["--log-level=loud", "--adapter=memory"]) == 1
        assert "loud" in capsys.readouterr().err.lower()

    def test_log_level_case_insensitive(self):
        assert main(["--log-level=debug", "--list-adapters"]) == 0

    def test_unsupported_workload(self):
        assert main(["--adapter=memory", "--workload=readrandom"]) == 1

    def test_missing_config_file(self, tmp_path: Path):
        """Test an unreadable config file is an error exit."""
        assert main(["-c", str(tmp_path / "missing.yaml"), "--adapter=memory"]) == 1

    def test_sqlite_from_config(self, tmp_path: Path, capsys):
        """Test a YAML config drives a sqlite run."""
        db_path = tmp_path / "bench.db"
        config = tmp_path / "bench.yaml"
        config.write_text(
            "adapter: sqlite\n"
            "num: 20\n"
            "threads: 2\n"
            "workload: fillseq,ycsba,ycsbe\n"
            "sqlite:\n"
            f"  path: {db_path}\n"
            "  sync: \"off\"\n"
        )

        assert main(["-c", str(config)]) == 0
        assert db_path.exists()
