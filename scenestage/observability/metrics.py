"""Prometheus metrics for scene orchestration."""

from prometheus_client import Counter, Histogram

# Scene transitions; an empty label means "no scene"
SCENE_TRANSITIONS = Counter(
    "scenestage_transitions_total",
    "Total number of scene transitions",
    labelnames=["from_scene", "to_scene"],
)

# Message routing
MESSAGES_HANDLED = Counter(
    "scenestage_messages_total",
    "Total number of messages handed to the stage",
    labelnames=["scene", "outcome"],
)

# Callback errors
CALLBACK_ERRORS = Counter(
    "scenestage_callback_errors_total",
    "Total number of failed scene callbacks",
    labelnames=["scene", "event"],
)

CALLBACK_LATENCY = Histogram(
    "scenestage_callback_latency_seconds",
    "Time spent running the callbacks of one scene event",
    labelnames=["event"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
