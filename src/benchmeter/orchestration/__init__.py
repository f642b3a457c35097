"""Benchmark orchestration."""

from .benchmark_orchestrator import BenchmarkOrchestrator

__all__ = ["BenchmarkOrchestrator"]
