"""Example: synthesize a small fixture grid and benchmark every reader."""

import logging
import tempfile

import numpy as np

from xlsx_bench import BenchmarkConfig, run_benchmark, summarize, synthesize
from xlsx_bench.dataset import derive_records, make_source
from xlsx_bench.readers import available_readers, get_reader
from xlsx_bench.report import format_summary

logging.basicConfig(level=logging.INFO)

# A reduced grid; BenchmarkConfig() is the full 4 x 5 x 10 run
config = BenchmarkConfig(columns=(5, 10), rows=(100, 500), sheets=10)
records = derive_records(make_source(np.random.default_rng(config.seed), 2000))

with tempfile.TemporaryDirectory() as fixture_dir:
    synthesize(records, config, fixture_dir)

    readers = [get_reader(name) for name in available_readers()]
    observations = run_benchmark(readers, config, fixture_dir)

print(format_summary(summarize(observations)))
