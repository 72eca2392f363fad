"""Constants for the benchmark data file format."""

# Prefix of the published data file; the dashboard loads it via <script>
DATA_JS_PREFIX = "window.BENCHMARK_DATA = "

# Suite name used by the benchmark action when none is configured
DEFAULT_SUITE_NAME = "Benchmark"
DEFAULT_TOOL = "cargo"
DEFAULT_DATA_FILE = "data.js"

# Alert when the current value is twice as bad as the previous one
DEFAULT_ALERT_THRESHOLD = "200%"

RANGE_SYMBOL = "±"

# Extractor names understood by the benchmark action
SUPPORTED_TOOLS = frozenset(
    {
        "cargo",
        "go",
        "benchmarkjs",
        "benchmarkluau",
        "pytest",
        "googlecpp",
        "catch2",
        "julia",
        "jmh",
        "benchmarkdotnet",
        "customBiggerIsBetter",
        "customSmallerIsBetter",
    }
)

BIGGER_IS_BETTER_TOOLS = frozenset({"customBiggerIsBetter"})
