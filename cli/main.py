"""kvbench CLI - run workloads against a key-value store adapter."""

import argparse
import logging
import sys

import yaml

from adapters.loader import load_plugins
from adapters.registry import default_registry
from bench.config import get_settings
from bench.engine import WorkloadEngine
from bench.options import Options
from common.errors import BenchError
from common.utils import load_yaml


EPILOG = """\
Benchmark options are passed as --key=value:
  --adapter=NAME         store adapter (dummy, memory, sqlite, redis, or a plugin)
  --num=N                iterations per worker thread
  --key_size=N           key width in digits
  --value_size=N         (maximum) value length
  --threads=N            worker threads per workload
  --workload=LIST        comma separated: fillseq,fillrandom,ycsba,ycsbb,ycsbc,ycsbd,ycsbe
  --distribution=NAME    value length distribution: uniform, normal or zipfian
  --<adapter>-KEY=VALUE  adapter specific option, e.g. --sqlite-path=bench.db
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kvbench",
        description="Key-value store benchmark harness",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("-c", "--config", help="YAML file with benchmark options")
    parser.add_argument("--plugin-dir", help="Directory of adapter plugins to load")
    parser.add_argument("--log-level", help="Logging level (default: from settings)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON lines")
    parser.add_argument(
        "--list-adapters",
        action="store_true",
        help="List available adapters and exit",
    )
    return parser


def build_options(config_path, argv, default_adapter: str) -> Options:
    """Merge file options with command-line options (command line wins)."""
    file_options = None
    if config_path:
        file_options = Options.from_mapping(load_yaml(config_path))
        default_adapter = file_options.adapter or default_adapter

    cli_options = Options.parse(argv, default_adapter=default_adapter)
    if file_options is None:
        return cli_options
    return file_options.merged(cli_options)


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)
    settings = get_settings()

    level = (args.log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        print(f"Error: invalid log level: {level}", file=sys.stderr)
        return 1

    # JSON results own stdout, so logs move to stderr
    logging.basicConfig(
        level=level,
        format=settings.log_format,
        handlers=[logging.StreamHandler(sys.stderr if args.json else sys.stdout)],
    )
    logger = logging.getLogger("kvbench")

    registry = default_registry()
    plugin_dir = args.plugin_dir or settings.plugin_dir
    if plugin_dir:
        load_plugins(registry, plugin_dir)

    if args.list_adapters:
        for name in registry.names():
            print(name)
        return 0

    engine = WorkloadEngine(value_pool_size=settings.value_pool_size, as_json=args.json)
    try:
        options = build_options(args.config, extra, settings.default_adapter)
        store = registry.create(options.adapter)
        engine.setup(store, options)
        engine.run()
    except (BenchError, OSError, yaml.YAMLError) as e:
        logger.error(f"Error: {e}")
        return 1
    finally:
        engine.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
