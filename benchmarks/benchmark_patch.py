"""Benchmark minimal-edit patching vs full rebuild.

Both strategies parse the whole document; the minimal edit additionally
walks a located tree, the rebuild re-serializes everything.

Run with:
    pytest benchmarks/benchmark_patch.py -v --benchmark-only
"""

import pytest

from jsonsplice import apply_patch, rebuild_document

PATH = ("records", 2500, "meta")
EDITED = '{"score": 1.5}'


@pytest.mark.benchmark(group="patch")
def test_benchmark_minimal_edit(benchmark, large_document):
    """Patch a nested object in place."""

    def minimal():
        return apply_patch(large_document, large_document, PATH, EDITED)

    result = benchmark(minimal)
    assert result.strategy == "minimal"


@pytest.mark.benchmark(group="patch")
def test_benchmark_minimal_edit_unverified(benchmark, large_document):
    """Patch in place without re-parsing the result."""
    from jsonsplice import PatchConfig

    config = PatchConfig(verify_edits=False)

    def minimal():
        return apply_patch(large_document, large_document, PATH, EDITED, config=config)

    benchmark(minimal)


@pytest.mark.benchmark(group="patch")
def test_benchmark_rebuild(benchmark, large_document):
    """Re-serialize the whole document (baseline)."""

    def rebuild():
        return rebuild_document(large_document, PATH, {"score": 1.5})

    benchmark(rebuild)
