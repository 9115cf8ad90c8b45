"""
Metrics definitions for EventControl.

This module defines Prometheus metrics for monitoring rule
evaluation and configuration persistence.
"""

from prometheus_client import Counter, Histogram, Gauge

# 카운터 메트릭
decisions_total = Counter(
    "eventcontrol_decisions_total",
    "Number of cancellation decisions by deciding tier",
    ["result"]
)

evaluation_errors_total = Counter(
    "eventcontrol_evaluation_errors_total",
    "Number of rule evaluations that failed and resolved to no match"
)

config_loads_total = Counter(
    "eventcontrol_config_loads_total",
    "Configuration load attempts",
    ["result"]
)

config_saves_total = Counter(
    "eventcontrol_config_saves_total",
    "Configuration save attempts",
    ["result"]
)

rule_mutations_total = Counter(
    "eventcontrol_rule_mutations_total",
    "Rule store mutations",
    ["op"]
)

region_mutations_total = Counter(
    "eventcontrol_region_mutations_total",
    "Region store mutations",
    ["op"]
)

# 히스토그램 메트릭
decision_seconds = Histogram(
    "eventcontrol_decision_duration_seconds",
    "Time spent deciding whether to cancel an event",
    buckets=[0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01]
)

# 게이지 메트릭
rules_loaded = Gauge(
    "eventcontrol_rules",
    "Current number of rules in the rule store"
)

regions_loaded = Gauge(
    "eventcontrol_regions",
    "Current number of regions in the region store"
)
