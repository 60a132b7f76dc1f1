"""Unit tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from common.errors import ConfigurationError
from common.models.distribution import DistributionConfig, DistributionKind
from common.models.metrics import LatencyStats, WorkloadResult
from common.models.workload import (
    EngineConfig,
    WorkloadName,
    GLOBAL_OPTION_KEYS,
    SUPPORTED_WORKLOADS,
    parse_workloads,
)


class TestDistributionConfig:
    """Tests for distribution configuration."""

    def test_defaults(self):
        """Test default parameters."""
        config = DistributionConfig(kind=DistributionKind.ZIPFIAN, min=0, max=10)

        assert config.span == 11
        assert config.zipfian_exponent == 1.2
        assert config.latest_lambda == 1.0

    def test_min_greater_than_max(self):
        """Test min > max fails validation."""
        with pytest.raises(ValidationError):
            DistributionConfig(min=10, max=1)

    def test_lambda_alias(self):
        """Test lambda is accepted under its natural name."""
        config = DistributionConfig(kind="latest", min=0, max=10, **{"lambda": 0.5})

        assert config.latest_lambda == 0.5

    def test_negative_exponent(self):
        """Test non-positive exponents fail validation."""
        with pytest.raises(ValidationError):
            DistributionConfig(kind="zipfian", min=0, max=10, exponent=-1)


class TestWorkloadParsing:
    """Tests for workload list parsing."""

    def test_supported_set(self):
        """Test the supported workload identifiers."""
        assert SUPPORTED_WORKLOADS == (
            "fillseq", "fillrandom", "ycsba", "ycsbb", "ycsbc", "ycsbd", "ycsbe",
        )

    def test_order_preserved(self):
        """Test workloads keep their listed order."""
        assert parse_workloads("ycsbc,fillseq,ycsba") == [
            WorkloadName.YCSBC, WorkloadName.FILLSEQ, WorkloadName.YCSBA,
        ]

    def test_empty_tokens_skipped(self):
        """Test stray commas are ignored."""
        assert parse_workloads("fillseq,,ycsbe,") == [WorkloadName.FILLSEQ, WorkloadName.YCSBE]

    def test_unsupported_workload(self):
        """Test unknown workloads raise a configuration error."""
        with pytest.raises(ConfigurationError, match="readrandom"):
            parse_workloads("fillseq,readrandom")


class TestEngineConfig:
    """Tests for engine configuration."""

    def test_defaults(self):
        """Test default configuration."""
        config = EngineConfig()

        assert config.num == 1000
        assert config.key_size == 16
        assert config.value_size == 1000
        assert config.threads == 1
        assert config.distribution is None
        assert config.workloads == [WorkloadName.FILLSEQ]

    def test_from_options(self):
        """Test building from raw string options."""
        config = EngineConfig.from_options({
            "num": "500",
            "key_size": "8",
            "value_size": "128",
            "threads": "4",
            "workload": "fillrandom,ycsbd",
            "distribution": "normal",
        })

        assert config.num == 500
        assert config.key_size == 8
        assert config.value_size == 128
        assert config.threads == 4
        assert config.workloads == [WorkloadName.FILLRANDOM, WorkloadName.YCSBD]
        assert config.distribution == DistributionKind.NORMAL

    def test_every_global_key_accepted(self):
        """Test each documented global option key is understood."""
        values = {
            "num": "1", "key_size": "1", "value_size": "1", "threads": "1",
            "workload": "ycsbc", "distribution": "zipfian",
        }

        assert set(values) == set(GLOBAL_OPTION_KEYS)
        config = EngineConfig.from_options(values)
        assert config.workloads == [WorkloadName.YCSBC]

    def test_unknown_option(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigurationError, match="bogus"):
            EngineConfig.from_options({"bogus": "1"})

    def test_unparsable_number(self):
        """Test non-numeric values are rejected."""
        with pytest.raises(ConfigurationError, match="num"):
            EngineConfig.from_options({"num": "lots"})

    def test_zero_threads(self):
        """Test thread counts below one are rejected."""
        with pytest.raises(ConfigurationError, match="threads"):
            EngineConfig.from_options({"threads": "0"})

    @pytest.mark.parametrize("name", ["latest", "fixed", "pareto"])
    def test_unsupported_distribution(self, name):
        """Test only uniform, normal and zipfian value lengths are accepted."""
        with pytest.raises(ConfigurationError):
            EngineConfig.from_options({"distribution": name})

    def test_immutable(self):
        """Test the config cannot be modified."""
        config = EngineConfig()

        with pytest.raises(ValidationError):
            config.num = 5


class TestWorkloadResult:
    """Tests for result models."""

    def test_to_jsonl(self):
        """Test compact JSON representation."""
        result = WorkloadResult(
            name="ycsba",
            threads=2,
            ops=10,
            reads=6,
            writes=4,
            found=5,
            ops_per_sec=1234.5678,
            latency_us=LatencyStats(avg=1.234, p50=1.0, p90=2.0, p99=3.0, max=4.0),
        )

        data = result.to_jsonl()

        assert data["workload"] == "ycsba"
        assert data["ops"] == {"t": 10, "r": 6, "w": 4, "d": 0, "found": 5}
        assert data["ops_sec"] == 1234.57
        assert data["lat_us"]["avg"] == 1.23
        assert result.not_found == 1
        assert result.micros_per_op == 1.234
