"""
Benchmark: model construction, serialization and validation.

Measures per-resource cost of the core entity operations on generated
vital-sign Observations, Bundle parsing throughput at several sizes,
and encoded payload sizes (JSON vs CBOR, with and without gzip).

Run from the repository root::

    python benchmarks/bench_serialization.py
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from bench_utils import DEFAULT_TRIALS, format_ci, timed_per_item, timed_trials
from data_generators import make_bundle_payload, make_observation_batch

from fhir_toolkit import r4
from fhir_toolkit.bundle import parse_bundle
from fhir_toolkit.codec import _HAS_CBOR2, from_json_string, payload_stats, to_json_string


@dataclass
class SerializationResults:
    entity_ops: dict[str, Any] = field(default_factory=dict)
    codec_ops: dict[str, Any] = field(default_factory=dict)
    bundle_scaling: dict[str, Any] = field(default_factory=dict)
    payload_sizes: dict[str, Any] = field(default_factory=dict)


def bench_entity_ops(n: int = 500, n_trials: int = DEFAULT_TRIALS) -> dict[str, Any]:
    """Per-Observation cost of construct / to_json / clone / validate."""
    payloads = make_observation_batch(n)
    models = [r4.Observation(p) for p in payloads]

    results: dict[str, Any] = {"n": n, "n_trials": n_trials}
    ops = {
        "construct": (r4.Observation, payloads),
        "to_json": (lambda m: m.to_json(), models),
        "clone": (lambda m: m.clone(), models),
        "with_changes": (lambda m: m.with_changes({"status": "amended"}), models),
        "validate": (lambda m: m.validate(), models),
    }
    for name, (fn, items) in ops.items():
        stats = timed_per_item(fn, items, n=n_trials)
        results[name] = {**stats.to_dict(), "us_per_resource": stats.mean_us()}
    return results


def bench_codec_ops(n: int = 500, n_trials: int = DEFAULT_TRIALS) -> dict[str, Any]:
    models = [r4.Observation(p) for p in make_observation_batch(n)]
    texts = [to_json_string(m) for m in models]

    results: dict[str, Any] = {"n": n, "n_trials": n_trials}
    results["to_json_string"] = timed_per_item(to_json_string, models, n=n_trials).to_dict()
    results["from_json_string"] = timed_per_item(from_json_string, texts, n=n_trials).to_dict()
    results["stdlib_json_dumps"] = timed_per_item(
        lambda m: json.dumps(m.to_json()), models, n=n_trials
    ).to_dict()

    if _HAS_CBOR2:
        from fhir_toolkit.codec import from_cbor, to_cbor

        blobs = [to_cbor(m) for m in models]
        results["to_cbor"] = timed_per_item(to_cbor, models, n=n_trials).to_dict()
        results["from_cbor"] = timed_per_item(from_cbor, blobs, n=n_trials).to_dict()
    return results


def bench_bundle_scaling(
    sizes: tuple[int, ...] = (10, 100, 1000),
    n_trials: int = 10,
) -> dict[str, Any]:
    """parse_bundle throughput at increasing entry counts."""
    results: dict[str, Any] = {}
    for size in sizes:
        payload = make_bundle_payload(size)
        stats = timed_trials(lambda: parse_bundle(payload), n=n_trials)
        entries = len(payload["entry"])
        results[f"n={size}"] = {
            **stats.to_dict(),
            "entries_per_sec": round(entries / stats.mean, 0) if stats.mean > 0 else 0,
        }
    return results


def bench_payload_sizes() -> dict[str, Any]:
    if not _HAS_CBOR2:
        return {"skipped": "cbor2 not installed"}
    results: dict[str, Any] = {}
    for size in (1, 10, 100):
        bundle = r4.Bundle(make_bundle_payload(size))
        stats = payload_stats(bundle)
        results[f"bundle_{size}"] = {
            "json_bytes": stats.json_bytes,
            "cbor_bytes": stats.cbor_bytes,
            "gzip_json_bytes": stats.gzip_json_bytes,
            "gzip_cbor_bytes": stats.gzip_cbor_bytes,
            "cbor_ratio": round(stats.cbor_ratio, 3),
            "gzip_cbor_ratio": round(stats.gzip_cbor_ratio, 3),
        }
    return results


def run_all() -> SerializationResults:
    results = SerializationResults()
    print("=== fhir-toolkit serialization benchmark ===\n")

    print("1  Entity operations...")
    results.entity_ops = bench_entity_ops()

    print("2  Codecs...")
    results.codec_ops = bench_codec_ops()

    print("3  Bundle scaling...")
    results.bundle_scaling = bench_bundle_scaling()

    print("4  Payload sizes...")
    results.payload_sizes = bench_payload_sizes()

    return results


if __name__ == "__main__":
    r = run_all()

    print(f"\n--- Entity operations (per resource, n={r.entity_ops['n']}) ---")
    for name in ("construct", "to_json", "clone", "with_changes", "validate"):
        print(f"  {name:<14}{r.entity_ops[name]['us_per_resource']:>10.2f} us")

    print("\n--- Bundle scaling ---")
    for key, v in r.bundle_scaling.items():
        print(f"  {key:<8}{v['mean_ms']:>10.2f} ms  ({v['entries_per_sec']:.0f} entries/s)")

    print("\n--- Payload sizes ---")
    for key, v in r.payload_sizes.items():
        if key == "skipped":
            print(f"  skipped: {v}")
            continue
        print(f"  {key}: JSON {v['json_bytes']}B -> CBOR {v['cbor_bytes']}B "
              f"-> gzip+CBOR {v['gzip_cbor_bytes']}B")

    construct = timed_per_item(r4.Observation, make_observation_batch(100), n=5)
    print(f"\nconstruct sanity check: {format_ci(construct, 'us')}")
