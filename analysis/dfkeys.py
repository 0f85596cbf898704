"""
Column names of the per-group metrics frame.
"""

QUERY = "query"
N = "n"

AVG_EXECUTION_TIME = "avg_execution_time"
MAX_EXECUTION_TIME = "max_execution_time"
AVG_TOTAL_QUERYABLE_SAMPLES = "avg_total_queryable_samples"
MAX_TOTAL_QUERYABLE_SAMPLES = "max_total_queryable_samples"
AVG_PEAK_SAMPLES = "avg_peak_samples"
MAX_PEAK_SAMPLES = "max_peak_samples"
