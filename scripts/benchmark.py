#!/usr/bin/env python3
"""
cbuffer Performance Benchmarking Script.

Measures byte and string throughput of RingBuffer, including wrap-around
and rejection paths, and reports process memory alongside the timings.

Usage:
    python scripts/benchmark.py [--capacity 50] [--iterations 10000] [--verbose] [--output results.json]
"""

import argparse
import json
import sys
import time
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import psutil

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cbuffer import BufferStatus, RingBuffer
from cbuffer.utils.performance import (
    get_performance_metrics,
    performance_context,
    reset_performance_metrics,
    timing
)


@dataclass
class BenchmarkResult:
    """Result of a benchmark test."""
    name: str
    duration_ms: float
    memory_usage_mb: float
    memory_delta_mb: float
    success: bool
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class BenchmarkSuite:
    """Complete benchmark suite results."""
    timestamp: str
    total_duration_ms: float
    tests_run: int
    tests_passed: int
    tests_failed: int
    results: List[BenchmarkResult]
    system_info: Dict[str, Any]
    performance_summary: Dict[str, Any]


def _rss_mb() -> float:
    return psutil.Process().memory_info().rss / (1024 * 1024)


class BufferBenchmarker:
    """Runs the RingBuffer benchmark suite."""

    def __init__(self, capacity: int = 50, iterations: int = 10000, verbose: bool = False):
        self.capacity = capacity
        self.iterations = iterations
        self.verbose = verbose
        self.results: List[BenchmarkResult] = []

        if verbose:
            print("cbuffer Performance Benchmarker")
            print("=" * 50)

    def log(self, message: str):
        """Log message if verbose mode is enabled."""
        if self.verbose:
            print(f"[{datetime.now().strftime('%H:%M:%S')}] {message}")

    def run_all_benchmarks(self) -> BenchmarkSuite:
        """Run the complete benchmark suite."""
        reset_performance_metrics()
        start_time = time.perf_counter()
        self.log(f"Starting benchmark suite (capacity={self.capacity}, iterations={self.iterations})...")

        self._run_benchmark("byte_round_trip", self._test_byte_round_trip)
        self._run_benchmark("fill_and_drain", self._test_fill_and_drain)
        self._run_benchmark("string_round_trip", self._test_string_round_trip)
        self._run_benchmark("peek_scan", self._test_peek_scan)
        self._run_benchmark("rejection_paths", self._test_rejection_paths)

        total_duration = (time.perf_counter() - start_time) * 1000
        tests_passed = sum(1 for r in self.results if r.success)

        suite = BenchmarkSuite(
            timestamp=datetime.now(timezone.utc).isoformat(),
            total_duration_ms=total_duration,
            tests_run=len(self.results),
            tests_passed=tests_passed,
            tests_failed=len(self.results) - tests_passed,
            results=self.results,
            system_info=self._get_system_info(),
            performance_summary=get_performance_metrics()
        )

        self.log(f"Benchmark suite completed in {total_duration:.2f}ms")
        return suite

    def _run_benchmark(self, name: str, test_func: Callable[[], Dict[str, Any]]):
        """Run a single benchmark and record its result."""
        self.log(f"  Running {name}...")

        initial_memory = _rss_mb()
        start_time = time.perf_counter()

        try:
            with performance_context(name, category="benchmark"):
                result = test_func()
            success, error_message = True, None
        except Exception as e:
            result, success, error_message = {}, False, str(e)

        duration_ms = (time.perf_counter() - start_time) * 1000
        final_memory = _rss_mb()

        self.results.append(BenchmarkResult(
            name=name,
            duration_ms=duration_ms,
            memory_usage_mb=final_memory,
            memory_delta_mb=final_memory - initial_memory,
            success=success,
            error_message=error_message,
            metadata={"result": result}
        ))

        if success:
            self.log(f"    {name}: {duration_ms:.2f}ms, {final_memory - initial_memory:+.2f}MB")
        else:
            self.log(f"    {name}: FAILED - {error_message}")

    @timing(category="buffer")
    def _test_byte_round_trip(self) -> Dict[str, Any]:
        buffer = RingBuffer(self.capacity)
        for i in range(self.iterations):
            buffer.push_byte(i & 0xFF)
            if buffer.pop_byte().value != i & 0xFF:
                raise AssertionError(f"FIFO order broken at iteration {i}")
        return {"operations": self.iterations * 2, "front": buffer.front, "rear": buffer.rear}

    @timing(category="buffer")
    def _test_fill_and_drain(self) -> Dict[str, Any]:
        buffer = RingBuffer(self.capacity)
        rounds = max(1, self.iterations // self.capacity)
        pushed = 0
        for _ in range(rounds):
            while buffer.push_byte(pushed & 0xFF) is BufferStatus.SUCCESS:
                pushed += 1
            while buffer.pop_byte():
                pass
        return {"rounds": rounds, "bytes_pushed": pushed}

    @timing(category="buffer")
    def _test_string_round_trip(self) -> Dict[str, Any]:
        buffer = RingBuffer(self.capacity)
        payload = b"x" * max(1, (self.capacity - 1) // 2 - 1)
        dest = bytearray(len(payload) + 1)
        for _ in range(self.iterations // 10 or 1):
            if buffer.push_string(payload) is not BufferStatus.SUCCESS:
                raise AssertionError("push_string failed on an empty buffer")
            buffer.read_string(len(payload), dest)
            buffer.pop_byte()  # stored terminator
        return {"payload_length": len(payload), "used_after": buffer.used_space()}

    @timing(category="buffer")
    def _test_peek_scan(self) -> Dict[str, Any]:
        buffer = RingBuffer(self.capacity)
        while buffer.push_byte(0x55) is BufferStatus.SUCCESS:
            pass
        total = 0
        for _ in range(self.iterations // self.capacity or 1):
            for index in range(buffer.used_space()):
                total += buffer.peek(index).value
        return {"bytes_peeked_sum": total}

    @timing(category="buffer")
    def _test_rejection_paths(self) -> Dict[str, Any]:
        buffer = RingBuffer(self.capacity)
        while buffer.push_byte(1) is BufferStatus.SUCCESS:
            pass
        statuses = {
            "push_byte": buffer.push_byte(1).name,
            "push_string": buffer.push_string(b"a").name,
            "read_string": buffer.read_string(self.capacity).status.name
        }
        buffer.clear()
        statuses["pop_byte"] = buffer.pop_byte().status.name
        return statuses

    def _get_system_info(self) -> Dict[str, Any]:
        """Get system information for benchmark context."""
        virtual_memory = psutil.virtual_memory()
        return {
            "python_version": sys.version,
            "platform": sys.platform,
            "memory_usage_mb": _rss_mb(),
            "memory_percent": virtual_memory.percent,
            "available_memory_mb": virtual_memory.available / (1024 * 1024)
        }


def main() -> int:
    """Main benchmarking script."""
    parser = argparse.ArgumentParser(description="cbuffer Performance Benchmarker")
    parser.add_argument("--capacity", "-c", type=int, default=50, help="Buffer capacity in bytes")
    parser.add_argument("--iterations", "-n", type=int, default=10000, help="Iterations per benchmark")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    parser.add_argument("--output", "-o", help="Output file for results (JSON)")

    args = parser.parse_args()

    benchmarker = BufferBenchmarker(args.capacity, args.iterations, verbose=args.verbose)
    suite = benchmarker.run_all_benchmarks()

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w') as f:
            json.dump(asdict(suite), f, indent=2, default=str)

        print(f"Results saved to {output_path}")

    print("\n" + "=" * 60)
    print("BENCHMARK SUMMARY")
    print("=" * 60)
    print(f"Total Duration: {suite.total_duration_ms:.2f}ms")
    print(f"Tests Run: {suite.tests_run}")
    print(f"Passed: {suite.tests_passed}")
    print(f"Failed: {suite.tests_failed}")

    if suite.tests_failed > 0:
        print("\nFAILED TESTS:")
        for result in suite.results:
            if not result.success:
                print(f"  - {result.name}: {result.error_message}")

    print(f"\nSystem: {suite.system_info['memory_usage_mb']:.1f}MB used")
    print("=" * 60)

    return 0 if suite.tests_failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
