"""XLSX-Bench: reproducible read-time benchmark of Python XLSX readers."""

from xlsx_bench.aggregate import summarize
from xlsx_bench.config import BenchmarkConfig
from xlsx_bench.harness import run_benchmark
from xlsx_bench.synthesizer import synthesize

__all__ = ["BenchmarkConfig", "run_benchmark", "summarize", "synthesize"]
