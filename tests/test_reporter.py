"""Unit tests for result reporting."""

import io
import json

from bench.reporter import format_result, report_results
from common.models.metrics import LatencyStats, WorkloadResult


def make_result(name: str, **kwargs) -> WorkloadResult:
    defaults = dict(
        threads=1,
        ops=1000,
        writes=1000,
        bytes=2 * 1024 ** 2,
        ops_per_sec=50000.0,
        mb_per_sec=12.5,
        latency_us=LatencyStats(avg=20.0, min=1.0, max=90.0, p50=18.0, p90=30.0, p99=80.0),
    )
    defaults.update(kwargs)
    return WorkloadResult(name=name, **defaults)


class TestFormatResult:
    """Tests for the one-line summary."""

    def test_format(self):
        line = format_result(make_result("fillseq"))

        assert line == (
            "fillseq      : 20.000 micros/op, 50000 ops/sec, 12.5 MB/sec, total ops: 1000"
        )


class TestReportResults:
    """Tests for table and JSON output."""

    def test_table(self):
        """Test header, separator and one row per workload in order."""
        stream = io.StringIO()

        report_results([make_result("fillseq"), make_result("ycsbc")], stream=stream)

        lines = stream.getvalue().splitlines()
        assert len(lines) == 4
        assert lines[0].split()[:3] == ["Workload", "Threads", "Ops"]
        assert set(lines[1]) == {"-"}
        assert lines[2].split()[0] == "fillseq"
        assert lines[3].split()[0] == "ycsbc"
        assert lines[2].endswith("2.00 MB")

    def test_json_lines(self):
        """Test one JSON object per workload."""
        stream = io.StringIO()

        report_results(
            [make_result("ycsba", reads=500, found=450)],
            stream=stream,
            as_json=True,
        )

        record = json.loads(stream.getvalue())
        assert record["workload"] == "ycsba"
        assert record["ops"]["found"] == 450
        assert record["lat_us"]["p99"] == 80.0

    def test_empty(self):
        """Test no results still prints the header."""
        stream = io.StringIO()

        report_results([], stream=stream)

        assert len(stream.getvalue().splitlines()) == 2
