"""Benchmark engine: configuration, phased execution and aggregation."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional, TextIO

from adapters.base import KVStore
from bench.options import Options
from bench.reporter import report_results
from bench.stats import RecorderState, StatsAggregator
from bench.values import MIN_POOL_SIZE
from bench.workloads import ThreadState, WorkloadContext, WorkloadMethod, get_workload
from common.errors import AdapterError
from common.models.metrics import WorkloadResult
from common.models.workload import EngineConfig

logger = logging.getLogger(__name__)


class WorkloadEngine:
    """Runs the configured workloads one after another against a store.

    Each workload is a phase: ``threads`` workers run the operation mix
    concurrently against the shared store, and the next phase starts only
    after every worker of the current one has finished.
    """

    def __init__(
        self,
        value_pool_size: int = MIN_POOL_SIZE,
        stream: Optional[TextIO] = None,
        as_json: bool = False,
    ):
        self.value_pool_size = value_pool_size
        self.stream = stream
        self.as_json = as_json

        self._store: Optional[KVStore] = None
        self._config: Optional[EngineConfig] = None
        self._results: list[WorkloadResult] = []
        self._closed = False

    @property
    def store(self) -> Optional[KVStore]:
        return self._store

    @property
    def config(self) -> Optional[EngineConfig]:
        return self._config

    @property
    def results(self) -> list[WorkloadResult]:
        return list(self._results)

    def setup(self, store: KVStore, options: Options) -> None:
        """Validate global options and initialize the store.

        Raises ConfigurationError before touching the store if the options
        are invalid, and AdapterError if the store fails to initialize.
        """
        self._store = store
        self._config = None

        config = EngineConfig.from_options(options.global_options())
        logger.info(
            f"Configured workloads {[w.value for w in config.workloads]} "
            f"(num={config.num}, threads={config.threads}, key_size={config.key_size}, "
            f"value_size={config.value_size}, distribution="
            f"{config.distribution.value if config.distribution else 'fixed'})"
        )

        result = store.init(options.adapter_options())
        if not result.ok:
            raise AdapterError(f"Failed to initialize adapter {options.adapter}: {result}")

        self._config = config

    def run(self) -> list[WorkloadResult]:
        """Execute every configured workload in order and report the results."""
        if self._store is None or self._config is None:
            raise RuntimeError("Engine is not set up")

        self._results = []
        for workload in self._config.workloads:
            method = get_workload(workload)
            self._results.append(self._run_phase(workload.value, method))

        report_results(self._results, stream=self.stream, as_json=self.as_json)
        return self.results

    def _run_phase(self, name: str, method: WorkloadMethod) -> WorkloadResult:
        config = self._config
        ctx = WorkloadContext(self._store, config, self.value_pool_size)
        states = [ThreadState(tid) for tid in range(config.threads)]

        logger.info(f"Starting workload {name} with {config.threads} thread(s)")
        started = time.perf_counter()

        workers = [
            threading.Thread(
                target=self._worker,
                args=(name, method, ctx, state),
                name=f"{name}-{state.tid}",
            )
            for state in states
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        aggregator = StatsAggregator(name)
        for state in states:
            aggregator.add(state.stats)
        result = aggregator.finalize()

        logger.info(
            f"Finished workload {name} in {time.perf_counter() - started:.2f}s: "
            f"{result.ops} ops, {result.ops_per_sec:.0f} ops/sec"
        )
        return result

    @staticmethod
    def _worker(name: str, method: WorkloadMethod, ctx: WorkloadContext, state: ThreadState) -> None:
        try:
            method(ctx, state)
        except Exception:
            # Errors stay confined to this worker
            logger.exception(f"Worker {state.tid} of workload {name} failed")
        finally:
            if state.stats.state is RecorderState.RUNNING:
                state.stats.stop()

    def close(self) -> None:
        """Close the store. Safe to call more than once."""
        if self._store is not None and not self._closed:
            self._store.close()
            self._closed = True
