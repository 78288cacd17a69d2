"""Tests for capability classification."""

import random

import pytest
from pydantic import ValidationError

from kontrolleur.models.capabilities import (
    CapabilityBucket,
    CapabilitySummary,
    CapabilityTaxonomy,
)
from kontrolleur.models.imports import ImportKind, ImportRecord
from kontrolleur.scanner.classifier import bucket_for, classify
from kontrolleur.scanner.inspector import summarize
from kontrolleur.scanner.taxonomy import get_default_taxonomy

from wasm_fixtures import SCENARIO_MODULE


def _rec(namespace: str, symbol: str, kind: ImportKind = ImportKind.FUNCTION) -> ImportRecord:
    return ImportRecord(namespace=namespace, symbol=symbol, kind=kind)


ENVIRONMENT = [
    "args_get", "args_sizes_get", "clock_res_get", "clock_time_get",
    "random_get", "environ_get", "environ_sizes_get",
]
PROCESS = ["proc_exit", "proc_raise", "sched_yield"]
NETWORK = ["sock_recv", "sock_send", "sock_shutdown"]
FILE_SYSTEM_SAMPLE = ["fd_write", "fd_read", "path_open", "path_unlink_file", "poll_oneoff"]


class TestBuckets:
    """Single-record bucket assignment."""

    @pytest.mark.parametrize("symbol", ENVIRONMENT)
    def test_environment(self, symbol):
        assert bucket_for(_rec("wasi_unstable", symbol), get_default_taxonomy()) == CapabilityBucket.ENVIRONMENT

    @pytest.mark.parametrize("symbol", PROCESS)
    def test_process(self, symbol):
        assert bucket_for(_rec("wasi_unstable", symbol), get_default_taxonomy()) == CapabilityBucket.PROCESS

    @pytest.mark.parametrize("symbol", NETWORK)
    def test_network(self, symbol):
        assert bucket_for(_rec("wasi_unstable", symbol), get_default_taxonomy()) == CapabilityBucket.NETWORK

    @pytest.mark.parametrize("symbol", FILE_SYSTEM_SAMPLE)
    def test_file_system(self, symbol):
        assert bucket_for(_rec("wasi_unstable", symbol), get_default_taxonomy()) == CapabilityBucket.FILE_SYSTEM

    def test_unknown_wasi_symbol(self):
        summary = classify([_rec("wasi_unstable", "sock_accept")])
        assert summary.unknown_wasi_symbol == ("sock_accept",)
        assert summary.network == ()
        assert summary.total == 1

    def test_wasi_symbol_under_other_namespace(self):
        summary = classify([_rec("env", "fd_write")])
        assert summary.unknown_namespace == ("env.fd_write",)
        assert summary.file_system == ()

    def test_kind_is_ignored(self):
        records = [
            _rec("wasi_unstable", "fd_read", ImportKind.FUNCTION),
            _rec("wasi_unstable", "fd_read", ImportKind.MEMORY),
            _rec("wasi_unstable", "fd_read", ImportKind.GLOBAL),
        ]
        assert classify(records).file_system == ("fd_read", "fd_read", "fd_read")


class TestSummary:
    """Whole-sequence properties of classify()."""

    def test_concrete_scenario(self):
        summary = summarize(SCENARIO_MODULE)
        assert summary.file_system == ("fd_write",)
        assert summary.process == ("sched_yield",)
        assert summary.unknown_namespace == ("env.custom_log",)
        assert summary.foreign_namespaces == ("env",)
        assert summary.environment == ()
        assert summary.network == ()
        assert summary.unknown_wasi_symbol == ()
        assert summary.total == 3
        assert summary.wasi_count == 2

    def test_empty(self):
        summary = classify([])
        assert summary.total == 0
        assert summary == CapabilitySummary()
        assert summary.resource_types() == []

    def test_file_order_kept(self):
        records = [_rec("wasi_unstable", s) for s in ["fd_write", "fd_close", "fd_read", "fd_close"]]
        assert classify(records).file_system == ("fd_write", "fd_close", "fd_read", "fd_close")

    def test_foreign_namespaces_distinct(self):
        records = [_rec("env", "a"), _rec("js", "b"), _rec("env", "c")]
        summary = classify(records)
        assert summary.unknown_namespace == ("env.a", "js.b", "env.c")
        assert summary.foreign_namespaces == ("env", "js")

    @pytest.mark.parametrize("seed", range(5))
    def test_totality(self, seed):
        rng = random.Random(seed)
        pool = ENVIRONMENT + PROCESS + NETWORK + FILE_SYSTEM_SAMPLE + ["sock_accept", "mystery"]
        records = [
            _rec(rng.choice(["wasi_unstable", "wasi_unstable", "env"]), rng.choice(pool))
            for _ in range(rng.randrange(0, 60))
        ]
        summary = classify(records)
        assert summary.total == len(records)
        assert sum(len(summary.bucket(b)) for b in CapabilityBucket) == len(records)

    def test_deterministic(self):
        assert summarize(SCENARIO_MODULE) == summarize(SCENARIO_MODULE)

    def test_resource_types_in_taxonomy_order(self):
        records = [_rec("wasi_unstable", "sock_send"), _rec("wasi_unstable", "proc_exit"), _rec("wasi_unstable", "fd_write")]
        assert classify(records).resource_types() == [
            CapabilityBucket.FILE_SYSTEM,
            CapabilityBucket.PROCESS,
            CapabilityBucket.NETWORK,
        ]

    def test_summary_is_immutable(self):
        summary = classify([_rec("wasi_unstable", "fd_write")])
        with pytest.raises(ValidationError):
            summary.file_system = ()


class TestCustomTaxonomy:
    """classify() against a non-default table."""

    def test_other_namespace(self):
        taxonomy = CapabilityTaxonomy(
            namespace="wasi_snapshot_preview1",
            symbols={"fd_write": CapabilityBucket.FILE_SYSTEM},
        )
        records = [
            _rec("wasi_snapshot_preview1", "fd_write"),
            _rec("wasi_snapshot_preview1", "proc_exit"),
            _rec("wasi_unstable", "fd_write"),
        ]
        summary = classify(records, taxonomy)
        assert summary.file_system == ("fd_write",)
        assert summary.unknown_wasi_symbol == ("proc_exit",)
        assert summary.unknown_namespace == ("wasi_unstable.fd_write",)

    def test_empty_table_degrades_to_unknown(self):
        summary = classify([_rec("wasi_unstable", "fd_write")], CapabilityTaxonomy())
        assert summary.unknown_wasi_symbol == ("fd_write",)
